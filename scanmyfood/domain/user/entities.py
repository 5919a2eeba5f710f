"""User entity and health metrics value object."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from scanmyfood.domain.shared.errors import ValidationError


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def validate_uid(uid: str) -> str:
    """Validate an identity token from the auth provider.

    The token is opaque; only emptiness and length are checked.

    Raises:
        ValidationError: If uid is empty or longer than 255 characters
    """
    if not isinstance(uid, str) or not uid.strip():
        raise ValidationError("User uid cannot be empty")
    if len(uid) > 255:
        raise ValidationError(f"User uid too long ({len(uid)} chars). Maximum 255 characters allowed")
    return uid


@dataclass(frozen=True)
class HealthMetrics:
    """Height, weight and goal collected during onboarding.

    Examples:
        >>> metrics = HealthMetrics(height_feet=5, height_inches=10, weight_kg=72.5, goal="lose")
        >>> round(metrics.height_cm, 1)
        177.8

    Raises:
        ValidationError: If a value is out of range
    """

    height_feet: int
    height_inches: int
    weight_kg: float
    goal: str

    def __post_init__(self) -> None:
        if self.height_feet < 0:
            raise ValidationError("height_feet cannot be negative")
        if not 0 <= self.height_inches < 12:
            raise ValidationError("height_inches must be between 0 and 11")
        if not math.isfinite(self.weight_kg) or self.weight_kg <= 0:
            raise ValidationError("weight_kg must be a positive finite number")
        if not self.goal or not self.goal.strip():
            raise ValidationError("goal cannot be empty")

    @property
    def height_cm(self) -> float:
        return (self.height_feet * 12 + self.height_inches) * 2.54


@dataclass
class User:
    """User profile keyed by the auth provider's identity token.

    Created on first sign-in with onboarding incomplete; preferences and
    health metrics are filled in by later onboarding steps.
    """

    uid: str
    email: Optional[str] = None
    display_name: Optional[str] = None
    onboarding_complete: bool = False
    dietary_preference: Optional[str] = None
    country: Optional[str] = None
    height_feet: Optional[int] = None
    height_inches: Optional[int] = None
    weight_kg: Optional[float] = None
    goal: Optional[str] = None
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)

    @staticmethod
    def create(uid: str, email: Optional[str] = None, display_name: Optional[str] = None) -> User:
        """Factory for a freshly signed-in user."""
        now = utcnow()
        return User(
            uid=validate_uid(uid),
            email=email,
            display_name=display_name,
            created_at=now,
            updated_at=now,
        )

    def mark_onboarding_complete(self) -> None:
        if self.onboarding_complete:
            return  # Already complete

        self.onboarding_complete = True
        self.updated_at = utcnow()

    def update_preferences(self, dietary_preference: str, country: str) -> None:
        self.dietary_preference = dietary_preference
        self.country = country
        self.updated_at = utcnow()

    def update_health_metrics(self, metrics: HealthMetrics) -> None:
        self.height_feet = metrics.height_feet
        self.height_inches = metrics.height_inches
        self.weight_kg = metrics.weight_kg
        self.goal = metrics.goal
        self.updated_at = utcnow()

    def to_dict(self) -> Dict[str, Any]:
        """Plain mapping used by persistence and the HTTP layer."""
        return {
            "uid": self.uid,
            "email": self.email,
            "display_name": self.display_name,
            "onboarding_complete": self.onboarding_complete,
            "dietary_preference": self.dietary_preference,
            "country": self.country,
            "height_feet": self.height_feet,
            "height_inches": self.height_inches,
            "weight_kg": self.weight_kg,
            "goal": self.goal,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> User:
        return User(
            uid=data["uid"],
            email=data.get("email"),
            display_name=data.get("display_name"),
            onboarding_complete=bool(data.get("onboarding_complete", False)),
            dietary_preference=data.get("dietary_preference"),
            country=data.get("country"),
            height_feet=data.get("height_feet"),
            height_inches=data.get("height_inches"),
            weight_kg=data.get("weight_kg"),
            goal=data.get("goal"),
            created_at=data.get("created_at") or utcnow(),
            updated_at=data.get("updated_at") or utcnow(),
        )
