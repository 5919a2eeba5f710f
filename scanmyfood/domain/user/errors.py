"""User domain exceptions."""

from scanmyfood.domain.shared.errors import ConflictError, NotFoundError


class UserNotFoundError(NotFoundError):
    """User was not found in the repository."""

    def __init__(self, uid: str):
        """Initialize with user identifier.

        Args:
            uid: Identity token that was not found
        """
        self.uid = uid
        super().__init__(f"User not found: {uid}")


class UserAlreadyExistsError(ConflictError):
    """User with given identifier already exists."""

    def __init__(self, uid: str):
        self.uid = uid
        super().__init__(f"User already exists: {uid}")
