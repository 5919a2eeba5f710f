"""User repository port (interface)."""

from abc import ABC, abstractmethod
from typing import Optional

from scanmyfood.domain.user.entities import User


class IUserRepository(ABC):
    """Repository interface for user profiles and onboarding state.

    Every operation is keyed by the auth provider's identity token (uid)
    and is atomic at single-record level. There is no transactional
    coupling between operations.

    Examples:
        >>> repo = InMemoryUserRepository()
        >>> await repo.is_new_user("firebase-uid-1")
        True
        >>> user = await repo.create_user("firebase-uid-1", "a@b.com", "Ada")
        >>> await repo.is_new_user("firebase-uid-1")
        False
    """

    @abstractmethod
    async def is_new_user(self, uid: str) -> bool:
        """Check whether no record exists for ``uid``."""
        pass

    @abstractmethod
    async def create_user(self, uid: str, email: str, display_name: str) -> User:
        """Create a user with onboarding incomplete.

        Raises:
            UserAlreadyExistsError: If a record already exists for ``uid``
        """
        pass

    @abstractmethod
    async def mark_onboarding_complete(self, uid: str) -> None:
        """Set the onboarding flag. Idempotent.

        Raises:
            UserNotFoundError: If no record exists for ``uid``
        """
        pass

    @abstractmethod
    async def is_onboarding_complete(self, uid: str) -> bool:
        """Read the onboarding flag.

        Raises:
            UserNotFoundError: If no record exists for ``uid``
        """
        pass

    @abstractmethod
    async def save_user_preferences(self, uid: str, dietary_preference: str, country: str) -> None:
        """Upsert dietary preference and country."""
        pass

    @abstractmethod
    async def save_health_metrics(
        self,
        uid: str,
        height_feet: int,
        height_inches: int,
        weight_kg: float,
        goal: str,
    ) -> None:
        """Upsert height, weight and goal.

        Raises:
            ValidationError: If a metric is out of range
        """
        pass

    @abstractmethod
    async def find_by_uid(self, uid: str) -> Optional[User]:
        """Return the user for ``uid`` or None."""
        pass

    async def close(self) -> None:
        """Release backend resources. No-op unless overridden."""
        return None
