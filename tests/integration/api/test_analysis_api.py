"""
Integration tests for analysis endpoints.

Requests go through the full FastAPI stack (routing, multipart parsing,
error handlers) with the model client mocked.
"""

from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient
from httpx import ASGITransport, AsyncClient
from structlog.testing import capture_logs

from scanmyfood.app import create_app
from scanmyfood.config import Settings
from scanmyfood.domain.shared.errors import TransportError
from scanmyfood.infrastructure.user.in_memory_user_repository import (
    InMemoryUserRepository,
)

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 16
JPEG_BYTES = b"\xff\xd8\xff\xe0" + b"\x00" * 16


class TestProductEndpoint:
    @pytest.mark.asyncio
    async def test_product_analysis(self, client: AsyncClient, fake_model) -> None:
        fake_model.reply = 'Here you go: {"product": {"name": "Crackers"}}'

        response = await client.post(
            "/api/v1/analysis/product",
            files={
                "front_image": ("front.jpg", JPEG_BYTES, "image/jpeg"),
                "label_image": ("label.png", PNG_BYTES, "image/png"),
            },
        )

        assert response.status_code == 200
        data = response.json()
        assert data["mode"] == "product_label"
        assert data["result"] == {"product": {"name": "Crackers"}}

        _, images = fake_model.calls[0]
        assert [image.mime_type for image in images] == ["image/jpeg", "image/png"]
        assert images[0].data == JPEG_BYTES

    @pytest.mark.asyncio
    async def test_octet_stream_falls_back_to_extension(
        self, client: AsyncClient, fake_model
    ) -> None:
        response = await client.post(
            "/api/v1/analysis/product",
            files={
                "front_image": ("front.PNG", PNG_BYTES, "application/octet-stream"),
                "label_image": ("label.bin", JPEG_BYTES, "application/octet-stream"),
            },
        )

        assert response.status_code == 200
        _, images = fake_model.calls[0]
        assert [image.mime_type for image in images] == ["image/png", "image/jpeg"]

    @pytest.mark.asyncio
    async def test_missing_label_image(self, client: AsyncClient, fake_model) -> None:
        response = await client.post(
            "/api/v1/analysis/product",
            files={"front_image": ("front.jpg", JPEG_BYTES, "image/jpeg")},
        )

        assert response.status_code == 422
        assert fake_model.calls == []

    @pytest.mark.asyncio
    async def test_empty_file_rejected(self, client: AsyncClient, fake_model) -> None:
        response = await client.post(
            "/api/v1/analysis/product",
            files={
                "front_image": ("front.jpg", b"", "image/jpeg"),
                "label_image": ("label.png", PNG_BYTES, "image/png"),
            },
        )

        assert response.status_code == 400
        assert "Empty file" in response.json()["detail"]
        assert fake_model.calls == []


class TestFoodImageEndpoint:
    @pytest.mark.asyncio
    async def test_food_image_analysis(self, client: AsyncClient, fake_model) -> None:
        fake_model.reply = '{"plate_analysis": {"meal_name": "Pizza", "items": []}}'

        response = await client.post(
            "/api/v1/analysis/food-image",
            files={"image": ("meal.jpg", JPEG_BYTES, "image/jpeg")},
        )

        assert response.status_code == 200
        assert response.json() == {
            "mode": "food_image",
            "result": {"plate_analysis": {"meal_name": "Pizza", "items": []}},
        }
        _, images = fake_model.calls[0]
        assert len(images) == 1

    @pytest.mark.asyncio
    async def test_reply_without_json_returns_502(self, client: AsyncClient, fake_model) -> None:
        fake_model.reply = "Sorry, I cannot identify this food."

        response = await client.post(
            "/api/v1/analysis/food-image",
            files={"image": ("meal.jpg", JPEG_BYTES, "image/jpeg")},
        )

        assert response.status_code == 502
        assert response.json()["error"] == "extraction"

    @pytest.mark.asyncio
    async def test_transport_error_returns_502(self, client: AsyncClient, fake_model) -> None:
        fake_model.error = TransportError("Model request failed: Connection error.")

        response = await client.post(
            "/api/v1/analysis/food-image",
            files={"image": ("meal.jpg", JPEG_BYTES, "image/jpeg")},
        )

        assert response.status_code == 502
        assert response.json() == {
            "error": "transport",
            "message": "Model request failed: Connection error.",
        }


class TestDescriptionEndpoint:
    @pytest.mark.asyncio
    async def test_description_analysis(self, client: AsyncClient, fake_model) -> None:
        fake_model.reply = '```json\n{"meal_analysis": {"meal_name": "Eggs"}}\n```'

        response = await client.post(
            "/api/v1/analysis/description",
            json={"description": "2 boiled eggs"},
        )

        assert response.status_code == 200
        assert response.json()["result"] == {"meal_analysis": {"meal_name": "Eggs"}}
        prompt, images = fake_model.calls[0]
        assert "2 boiled eggs" in prompt
        assert images == []

    @pytest.mark.asyncio
    async def test_blank_description_returns_422(self, client: AsyncClient, fake_model) -> None:
        response = await client.post(
            "/api/v1/analysis/description",
            json={"description": "   "},
        )

        assert response.status_code == 422
        assert response.json()["error"] == "validation"
        assert fake_model.calls == []

    @pytest.mark.asyncio
    async def test_malformed_json_returns_502(self, client: AsyncClient, fake_model) -> None:
        fake_model.reply = '{"meal_analysis": {"calories": 12,}}'

        response = await client.post(
            "/api/v1/analysis/description",
            json={"description": "soup"},
        )

        assert response.status_code == 502
        assert response.json()["error"] == "parse"


class TestAnalysisNotConfigured:
    @pytest.mark.asyncio
    async def test_without_service_returns_500(self, settings: Settings) -> None:
        app = create_app(settings=settings, user_repository=InMemoryUserRepository())
        transport = ASGITransport(app=app)

        async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
            response = await ac.post(
                "/api/v1/analysis/description", json={"description": "soup"}
            )

        assert response.status_code == 500
        assert response.json()["error"] == "configuration"

    def test_startup_without_api_key(self) -> None:
        """Missing key disables analysis; user endpoints keep working."""
        settings = Settings(openai_api_key=None, user_repository="inmemory")

        with patch(
            "scanmyfood.infrastructure.ai.openai_client.get_settings",
            return_value=settings,
        ):
            app = create_app(settings=settings)
            with TestClient(app) as test_client:
                analysis = test_client.post(
                    "/api/v1/analysis/description", json={"description": "soup"}
                )
                users = test_client.get("/api/v1/users/uid-1/is-new")

        assert analysis.status_code == 500
        assert "OPENAI_API_KEY" in analysis.json()["message"]
        assert users.status_code == 200
        assert users.json() == {"uid": "uid-1", "is_new": True}


@pytest.mark.asyncio
async def test_health(client: AsyncClient) -> None:
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"


@pytest.mark.asyncio
async def test_upload_logged_with_structured_fields(client: AsyncClient) -> None:
    with capture_logs() as logs:
        await client.post(
            "/api/v1/analysis/food-image",
            files={"image": ("meal.png", PNG_BYTES, "application/octet-stream")},
        )

    received = [entry for entry in logs if entry["event"] == "Image received"]
    assert len(received) == 1
    assert received[0]["file_name"] == "meal.png"
    assert received[0]["mime_type"] == "image/png"
    assert received[0]["size"] == len(PNG_BYTES)
