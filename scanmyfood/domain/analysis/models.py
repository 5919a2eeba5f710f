"""
Domain models for food analysis.

Requests are a tagged variant over the three analysis modes; results are
plain JSON mappings whose shape depends on the mode.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

JSONValue = Union[None, bool, int, float, str, List[Any], Dict[str, Any]]
AnalysisResult = Dict[str, JSONValue]


class AnalysisMode(str, Enum):
    """Selects the prompt template and response schema."""

    PRODUCT_LABEL = "product_label"  # front image + nutrition label
    FOOD_IMAGE = "food_image"  # single plate photo
    MEAL_DESCRIPTION = "meal_description"  # free text


class ImageAttachment(BaseModel):
    """
    Binary image sent to the model.

    Attributes:
        data: Raw image bytes
        mime_type: Resolved MIME type (see ``mime.resolve_mime_type``)
    """

    model_config = ConfigDict(frozen=True)

    data: bytes = Field(..., description="Raw image bytes")
    mime_type: str = Field("image/jpeg", description="Image MIME type")

    @field_validator("data")
    @classmethod
    def not_empty(cls, v: bytes) -> bytes:
        """Reject empty uploads."""
        if not v:
            raise ValueError("Image data cannot be empty")
        return v

    def __repr__(self) -> str:
        return f"ImageAttachment(mime_type='{self.mime_type}', size={len(self.data)})"


class ProductImagesRequest(BaseModel):
    """Product front image plus its nutrition label."""

    model_config = ConfigDict(frozen=True)

    front_image: ImageAttachment
    label_image: ImageAttachment

    @property
    def mode(self) -> AnalysisMode:
        return AnalysisMode.PRODUCT_LABEL

    @property
    def images(self) -> List[ImageAttachment]:
        return [self.front_image, self.label_image]


class FoodImageRequest(BaseModel):
    """Single photo of a meal or plate."""

    model_config = ConfigDict(frozen=True)

    image: ImageAttachment

    @property
    def mode(self) -> AnalysisMode:
        return AnalysisMode.FOOD_IMAGE

    @property
    def images(self) -> List[ImageAttachment]:
        return [self.image]


class MealDescriptionRequest(BaseModel):
    """
    Free-text meal description.

    Example:
        >>> request = MealDescriptionRequest(description="2 eggs, 1 toast")
        >>> request.mode
        <AnalysisMode.MEAL_DESCRIPTION: 'meal_description'>
    """

    model_config = ConfigDict(frozen=True)

    description: str = Field(..., min_length=1, max_length=4000)

    @field_validator("description")
    @classmethod
    def not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Description cannot be empty or whitespace")
        return v

    @property
    def mode(self) -> AnalysisMode:
        return AnalysisMode.MEAL_DESCRIPTION

    @property
    def images(self) -> List[ImageAttachment]:
        return []


AnalysisRequest = Union[ProductImagesRequest, FoodImageRequest, MealDescriptionRequest]
