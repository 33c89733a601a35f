"""Errors raised by the user and project stores.

Messages never include user-supplied values such as email addresses, so
they are safe to log.
"""


class RepositoryError(Exception):
    """Base exception for the stores."""


class NotFoundError(RepositoryError):
    """No row visible to the caller.

    Project lookups are scoped to the owner, so another user's project is
    reported the same way as a missing one.
    """

    def __init__(self, entity_type: str, entity_id: str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} {entity_id} not found")


class DuplicateError(RepositoryError):
    """Insert collided with a unique column (users.email)."""

    def __init__(self, entity_type: str, field: str):
        self.entity_type = entity_type
        self.field = field
        super().__init__(f"{entity_type}.{field} is already taken")
