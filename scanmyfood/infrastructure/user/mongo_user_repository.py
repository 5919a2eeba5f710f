"""MongoDB User Repository implementation."""

from typing import Any, Dict, Optional

import structlog

from scanmyfood.domain.user.entities import HealthMetrics, User, utcnow, validate_uid
from scanmyfood.domain.user.errors import UserAlreadyExistsError, UserNotFoundError
from scanmyfood.domain.user.ports import IUserRepository

logger = structlog.get_logger(__name__)

# Fields written only when an upsert creates the document.
_INSERT_DEFAULTS: Dict[str, Any] = {
    "email": None,
    "display_name": None,
    "onboarding_complete": False,
}


class MongoUserRepository(IUserRepository):
    """MongoDB implementation of User repository.

    One document per user in the ``users`` collection, keyed by ``uid``
    (unique index expected). Writes use single-document ``update_one``
    so each operation is atomic on its own.

    Examples:
        >>> client = AsyncIOMotorClient(settings.mongodb_uri)
        >>> repo = MongoUserRepository(client[settings.mongodb_database])
        >>> user = await repo.create_user("uid-123", "ada@example.com", "Ada")
    """

    def __init__(self, db: Any) -> None:
        """Initialize repository with MongoDB database.

        Args:
            db: Motor database instance
        """
        self.db = db
        self.collection = db.users

    async def is_new_user(self, uid: str) -> bool:
        count = await self.collection.count_documents({"uid": validate_uid(uid)}, limit=1)
        return bool(count == 0)

    async def create_user(self, uid: str, email: str, display_name: str) -> User:
        user = User.create(uid, email=email, display_name=display_name)

        # $setOnInsert leaves an existing document untouched
        result = await self.collection.update_one(
            {"uid": user.uid},
            {"$setOnInsert": user.to_dict()},
            upsert=True,
        )
        if result.upserted_id is None:
            raise UserAlreadyExistsError(uid)

        logger.info("User created", uid=uid)
        return user

    async def mark_onboarding_complete(self, uid: str) -> None:
        result = await self.collection.update_one(
            {"uid": validate_uid(uid), "onboarding_complete": {"$ne": True}},
            {"$set": {"onboarding_complete": True, "updated_at": utcnow()}},
        )
        if result.matched_count == 0 and not await self._exists(uid):
            raise UserNotFoundError(uid)

    async def is_onboarding_complete(self, uid: str) -> bool:
        document = await self.collection.find_one(
            {"uid": validate_uid(uid)}, {"onboarding_complete": 1}
        )
        if not document:
            raise UserNotFoundError(uid)
        return bool(document.get("onboarding_complete", False))

    async def save_user_preferences(self, uid: str, dietary_preference: str, country: str) -> None:
        await self._upsert_fields(
            uid, {"dietary_preference": dietary_preference, "country": country}
        )

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
        await self._upsert_fields(
            uid,
            {
                "height_feet": metrics.height_feet,
                "height_inches": metrics.height_inches,
                "weight_kg": metrics.weight_kg,
                "goal": metrics.goal,
            },
        )

    async def find_by_uid(self, uid: str) -> Optional[User]:
        document = await self.collection.find_one({"uid": validate_uid(uid)})

        if not document:
            return None

        return self._document_to_entity(document)

    async def close(self) -> None:
        """Close the underlying Motor client."""
        self.db.client.close()
        logger.info("MongoDB client closed")

    async def _exists(self, uid: str) -> bool:
        count = await self.collection.count_documents({"uid": uid}, limit=1)
        return bool(count > 0)

    async def _upsert_fields(self, uid: str, fields: Dict[str, Any]) -> None:
        now = utcnow()
        await self.collection.update_one(
            {"uid": validate_uid(uid)},
            {
                "$set": {**fields, "updated_at": now},
                "$setOnInsert": {**_INSERT_DEFAULTS, "uid": uid, "created_at": now},
            },
            upsert=True,
        )

    def _document_to_entity(self, document: Dict[str, Any]) -> User:
        """Convert MongoDB document to User entity."""
        document = {k: v for k, v in document.items() if k != "_id"}
        return User.from_dict(document)
