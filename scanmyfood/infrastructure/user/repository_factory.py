"""User repository factory for environment-based selection.

This factory creates the appropriate repository implementation based on
the USER_REPOSITORY setting:
- "inmemory": InMemoryUserRepository (for testing and local runs)
- "mongodb": MongoUserRepository (for production)

Default: inmemory
"""

from typing import Optional

from motor.motor_asyncio import AsyncIOMotorClient

from scanmyfood.config import Settings, get_settings
from scanmyfood.domain.shared.errors import ConfigurationError
from scanmyfood.domain.user.ports import IUserRepository
from scanmyfood.infrastructure.user.in_memory_user_repository import (
    InMemoryUserRepository,
)
from scanmyfood.infrastructure.user.mongo_user_repository import MongoUserRepository


def create_user_repository(settings: Optional[Settings] = None) -> IUserRepository:
    """Create user repository based on configuration.

    Returns:
        IUserRepository: The configured repository implementation

    Raises:
        ConfigurationError: On unknown backend or missing MONGODB_URI
    """
    settings = settings or get_settings()
    repo_type = settings.user_repository

    if repo_type == "mongodb":
        if not settings.mongodb_uri:
            raise ConfigurationError(
                "MONGODB_URI environment variable is required when USER_REPOSITORY=mongodb"
            )

        client: AsyncIOMotorClient = AsyncIOMotorClient(settings.mongodb_uri)  # type: ignore
        return MongoUserRepository(client[settings.mongodb_database])

    elif repo_type == "inmemory":
        return InMemoryUserRepository()

    else:
        raise ConfigurationError(
            f"Invalid USER_REPOSITORY value: {repo_type}. Expected 'inmemory' or 'mongodb'"
        )


# Singleton instance
_user_repository: Optional[IUserRepository] = None


def get_user_repository() -> IUserRepository:
    """Get singleton user repository instance."""
    global _user_repository

    if _user_repository is None:
        _user_repository = create_user_repository()

    return _user_repository


def reset_user_repository() -> None:
    """Reset the singleton (for testing purposes)."""
    global _user_repository
    _user_repository = None
