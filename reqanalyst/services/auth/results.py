"""Result types returned by the auth façade.

Handlers get explicit values back instead of exceptions used as control
flow. The route layer decides how each one becomes an HTTP response.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Authenticated:
    """A valid session is present."""

    user_id: str
    kind: str = "ok"


@dataclass(frozen=True)
class Redirect:
    """Send the caller elsewhere, optionally setting headers (e.g. a cookie)."""

    to: str
    headers: dict[str, str] = field(default_factory=dict)
    kind: str = "redirect"


SessionResult = Authenticated | Redirect


@dataclass(frozen=True)
class ResetRequestResult:
    """Outcome of a reset request. Identical for known and unknown emails."""

    success: bool = True
    preview_url: str | None = None


@dataclass(frozen=True)
class ResetResult:
    """Outcome of consuming a reset token."""

    success: bool
    error: str | None = None
