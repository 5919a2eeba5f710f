"""
Shared fixtures.

Mock model clients, in-memory repositories and sample images. No test
touches the network or a real database.
"""

from typing import AsyncIterator, List, Optional, Sequence, Tuple

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from scanmyfood.app import create_app
from scanmyfood.config import Settings
from scanmyfood.domain.analysis.models import ImageAttachment
from scanmyfood.domain.analysis.service import FoodAnalysisService
from scanmyfood.infrastructure.user.in_memory_user_repository import (
    InMemoryUserRepository,
)

# Smallest valid PNG / JPEG headers are enough: the model is mocked.
PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 16
JPEG_BYTES = b"\xff\xd8\xff\xe0" + b"\x00" * 16


class FakeModelClient:
    """Model client returning canned replies and recording calls."""

    def __init__(self, reply: str = "{}", error: Optional[Exception] = None) -> None:
        self.reply = reply
        self.error = error
        self.calls: List[Tuple[str, List[ImageAttachment]]] = []

    async def generate(self, prompt: str, images: Sequence[ImageAttachment] = ()) -> str:
        self.calls.append((prompt, list(images)))
        if self.error is not None:
            raise self.error
        return self.reply


# ═══════════════════════════════════════════════════════════
# DOMAIN FIXTURES
# ═══════════════════════════════════════════════════════════


@pytest.fixture
def png_image() -> ImageAttachment:
    return ImageAttachment(data=PNG_BYTES, mime_type="image/png")


@pytest.fixture
def jpeg_image() -> ImageAttachment:
    return ImageAttachment(data=JPEG_BYTES, mime_type="image/jpeg")


@pytest.fixture
def model_factory():
    """Factory for FakeModelClient with a custom reply or error."""
    return FakeModelClient


@pytest.fixture
def fake_model() -> FakeModelClient:
    """Default behavior: replies with an empty JSON object."""
    return FakeModelClient()


@pytest.fixture
def analysis_service(fake_model: FakeModelClient) -> FoodAnalysisService:
    return FoodAnalysisService(fake_model)


@pytest.fixture
def user_repository() -> InMemoryUserRepository:
    return InMemoryUserRepository()


# ═══════════════════════════════════════════════════════════
# HTTP CLIENT
# ═══════════════════════════════════════════════════════════


@pytest.fixture
def settings() -> Settings:
    """Settings isolated from the process environment."""
    return Settings(openai_api_key=None, user_repository="inmemory")


@pytest_asyncio.fixture
async def client(
    settings: Settings,
    analysis_service: FoodAnalysisService,
    user_repository: InMemoryUserRepository,
) -> AsyncIterator[AsyncClient]:
    """HTTP client bound to an app with injected services."""
    app = create_app(
        settings=settings,
        analysis_service=analysis_service,
        user_repository=user_repository,
    )
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac
