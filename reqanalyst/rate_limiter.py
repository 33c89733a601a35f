"""Rate limiting for the credential endpoints, keyed by client address."""

from slowapi import Limiter
from slowapi.util import get_remote_address

from reqanalyst.config import settings

REGISTER_LIMIT = "5/minute"
LOGIN_LIMIT = "5/minute"
FORGOT_PASSWORD_LIMIT = "3/hour"

limiter = Limiter(key_func=get_remote_address, enabled=settings.rate_limit_enabled)
