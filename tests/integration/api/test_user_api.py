"""Integration tests for user onboarding endpoints."""

import pytest
from httpx import AsyncClient

from scanmyfood.infrastructure.user.in_memory_user_repository import (
    InMemoryUserRepository,
)


async def _create(client: AsyncClient, uid: str = "uid-1") -> None:
    response = await client.post(
        "/api/v1/users",
        json={"uid": uid, "email": "ada@example.com", "display_name": "Ada"},
    )
    assert response.status_code == 201


class TestCreateUser:
    @pytest.mark.asyncio
    async def test_create_user(self, client: AsyncClient) -> None:
        response = await client.post(
            "/api/v1/users",
            json={"uid": "uid-1", "email": "ada@example.com", "display_name": "Ada"},
        )

        assert response.status_code == 201
        data = response.json()
        assert data["uid"] == "uid-1"
        assert data["email"] == "ada@example.com"
        assert data["onboarding_complete"] is False
        assert data["dietary_preference"] is None

    @pytest.mark.asyncio
    async def test_create_twice_returns_409(self, client: AsyncClient) -> None:
        await _create(client)

        response = await client.post(
            "/api/v1/users",
            json={"uid": "uid-1", "email": "other@example.com", "display_name": "Other"},
        )

        assert response.status_code == 409
        assert response.json()["error"] == "conflict"

    @pytest.mark.asyncio
    async def test_is_new_user(self, client: AsyncClient) -> None:
        before = await client.get("/api/v1/users/uid-1/is-new")
        await _create(client)
        after = await client.get("/api/v1/users/uid-1/is-new")

        assert before.json() == {"uid": "uid-1", "is_new": True}
        assert after.json() == {"uid": "uid-1", "is_new": False}

    @pytest.mark.asyncio
    async def test_get_unknown_user_returns_404(self, client: AsyncClient) -> None:
        response = await client.get("/api/v1/users/missing")

        assert response.status_code == 404
        assert response.json() == {"error": "not_found", "message": "User not found: missing"}


class TestOnboardingFlow:
    @pytest.mark.asyncio
    async def test_full_onboarding(
        self, client: AsyncClient, user_repository: InMemoryUserRepository
    ) -> None:
        await _create(client)

        preferences = await client.put(
            "/api/v1/users/uid-1/preferences",
            json={"dietary_preference": "vegetarian", "country": "IT"},
        )
        metrics = await client.put(
            "/api/v1/users/uid-1/health-metrics",
            json={"height_feet": 5, "height_inches": 9, "weight_kg": 68.0, "goal": "maintain"},
        )
        complete = await client.post("/api/v1/users/uid-1/onboarding/complete")
        status = await client.get("/api/v1/users/uid-1/onboarding")

        assert preferences.status_code == 204
        assert metrics.status_code == 204
        assert complete.status_code == 204
        assert status.json() == {"uid": "uid-1", "onboarding_complete": True}

        profile = (await client.get("/api/v1/users/uid-1")).json()
        assert profile["dietary_preference"] == "vegetarian"
        assert profile["height_inches"] == 9
        assert profile["goal"] == "maintain"

        stored = await user_repository.find_by_uid("uid-1")
        assert stored is not None
        assert stored.onboarding_complete is True

    @pytest.mark.asyncio
    async def test_complete_twice_is_noop(self, client: AsyncClient) -> None:
        await _create(client)

        first = await client.post("/api/v1/users/uid-1/onboarding/complete")
        second = await client.post("/api/v1/users/uid-1/onboarding/complete")

        assert first.status_code == 204
        assert second.status_code == 204

    @pytest.mark.asyncio
    async def test_onboarding_status_unknown_user(self, client: AsyncClient) -> None:
        response = await client.get("/api/v1/users/missing/onboarding")

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_invalid_health_metrics_returns_422(self, client: AsyncClient) -> None:
        await _create(client)

        response = await client.put(
            "/api/v1/users/uid-1/health-metrics",
            json={"height_feet": 5, "height_inches": 15, "weight_kg": 68.0, "goal": "maintain"},
        )

        assert response.status_code == 422
        assert response.json()["error"] == "validation"

    @pytest.mark.asyncio
    async def test_nan_weight_returns_422(
        self, client: AsyncClient, user_repository: InMemoryUserRepository
    ) -> None:
        """Python's json parser accepts NaN literals in request bodies."""
        await _create(client)

        response = await client.put(
            "/api/v1/users/uid-1/health-metrics",
            content=b'{"height_feet": 5, "height_inches": 9, "weight_kg": NaN, "goal": "maintain"}',
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 422
        assert response.json()["error"] == "validation"
        stored = await user_repository.find_by_uid("uid-1")
        assert stored is not None
        assert stored.weight_kg is None
