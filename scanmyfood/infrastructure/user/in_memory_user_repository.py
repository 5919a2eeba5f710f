"""In-memory User Repository."""

from typing import Dict, Optional

import structlog

from scanmyfood.domain.user.entities import HealthMetrics, User, validate_uid
from scanmyfood.domain.user.errors import UserAlreadyExistsError, UserNotFoundError
from scanmyfood.domain.user.ports import IUserRepository

logger = structlog.get_logger(__name__)


class InMemoryUserRepository(IUserRepository):
    """In-memory implementation of User repository.

    Stores users in a dict keyed by uid. Used in tests and as the default
    runtime backend when no database is configured.

    Examples:
        >>> repo = InMemoryUserRepository()
        >>> user = await repo.create_user("uid-123", "ada@example.com", "Ada")
        >>> await repo.is_onboarding_complete("uid-123")
        False
    """

    def __init__(self) -> None:
        """Initialize empty in-memory storage."""
        self._users: Dict[str, User] = {}

    async def is_new_user(self, uid: str) -> bool:
        return validate_uid(uid) not in self._users

    async def create_user(self, uid: str, email: str, display_name: str) -> User:
        if validate_uid(uid) in self._users:
            raise UserAlreadyExistsError(uid)

        user = User.create(uid, email=email, display_name=display_name)
        self._users[uid] = user
        logger.info("User created", uid=uid)
        return user

    async def mark_onboarding_complete(self, uid: str) -> None:
        self._get_or_raise(uid).mark_onboarding_complete()

    async def is_onboarding_complete(self, uid: str) -> bool:
        return self._get_or_raise(uid).onboarding_complete

    async def save_user_preferences(self, uid: str, dietary_preference: str, country: str) -> None:
        self._get_or_create(uid).update_preferences(dietary_preference, country)

    async def save_health_metrics(
        self,
        uid: str,
        height_feet: int,
        height_inches: int,
        weight_kg: float,
        goal: str,
    ) -> None:
        metrics = HealthMetrics(
            height_feet=height_feet,
            height_inches=height_inches,
            weight_kg=weight_kg,
            goal=goal,
        )
        self._get_or_create(uid).update_health_metrics(metrics)

    async def find_by_uid(self, uid: str) -> Optional[User]:
        return self._users.get(validate_uid(uid))

    def _get_or_raise(self, uid: str) -> User:
        user = self._users.get(validate_uid(uid))
        if user is None:
            raise UserNotFoundError(uid)
        return user

    def _get_or_create(self, uid: str) -> User:
        user = self._users.get(validate_uid(uid))
        if user is None:
            user = User.create(uid)
            self._users[uid] = user
        return user

    def clear(self) -> None:
        """Clear all users from memory.

        Useful for test cleanup.
        """
        self._users.clear()

    def count(self) -> int:
        """Get total number of users in memory."""
        return len(self._users)
