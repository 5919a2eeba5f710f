"""
Food analysis service.

Glue for the three analysis modes: build the prompt, call the model,
extract the embedded JSON object.
"""

from __future__ import annotations

import time
from typing import Protocol, Sequence

import structlog
from pydantic import ValidationError as PydanticValidationError

from scanmyfood.domain.analysis.extractor import extract_json_object
from scanmyfood.domain.analysis.models import (
    AnalysisRequest,
    AnalysisResult,
    FoodImageRequest,
    ImageAttachment,
    MealDescriptionRequest,
    ProductImagesRequest,
)
from scanmyfood.domain.analysis.prompts import build_prompt
from scanmyfood.domain.shared.errors import DomainError, ValidationError

logger = structlog.get_logger(__name__)


class ModelClient(Protocol):
    """Anything that turns a prompt plus images into raw model text."""

    async def generate(self, prompt: str, images: Sequence[ImageAttachment] = ()) -> str:
        ...


class FoodAnalysisService:
    """
    Service for AI-powered nutritional analysis.

    Example:
        >>> async with OpenAIClient.from_settings() as client:
        ...     service = FoodAnalysisService(client)
        ...     result = await service.analyze_food_description("2 boiled eggs")
        >>> result["meal_analysis"]["meal_name"]
        'Boiled Eggs'
    """

    def __init__(self, model_client: ModelClient):
        self.model_client = model_client

    async def analyze(self, request: AnalysisRequest) -> AnalysisResult:
        """
        Run one analysis request end to end.

        Args:
            request: Product pair, single image, or meal description

        Returns:
            JSON object parsed from the model reply

        Raises:
            TransportError: Model call failed
            ExtractionError: Reply contains no JSON object
            ParseError: Reply contains malformed JSON
        """
        mode = request.mode.value
        start_time = time.time()
        prompt = build_prompt(request)

        try:
            raw_text = await self.model_client.generate(prompt, request.images)
            result = extract_json_object(raw_text)
        except DomainError as e:
            logger.error(
                "Food analysis failed",
                mode=mode,
                error=e.kind,
                message=e.message,
            )
            raise

        logger.info(
            "Food analysis complete",
            mode=mode,
            keys=sorted(result.keys()),
            processing_time_ms=int((time.time() - start_time) * 1000),
        )
        return result

    async def analyze_product_images(
        self, front_image: ImageAttachment, label_image: ImageAttachment
    ) -> AnalysisResult:
        """Analyze a product's front image together with its nutrition label."""
        return await self.analyze(
            ProductImagesRequest(front_image=front_image, label_image=label_image)
        )

    async def analyze_food_image(self, image: ImageAttachment) -> AnalysisResult:
        """Analyze a single photo of a plate or meal."""
        return await self.analyze(FoodImageRequest(image=image))

    async def analyze_food_description(self, description: str) -> AnalysisResult:
        """Analyze a free-text meal description.

        Raises:
            ValidationError: If the description is empty or too long
        """
        try:
            request = MealDescriptionRequest(description=description)
        except PydanticValidationError as e:
            raise ValidationError(f"Invalid meal description: {e.errors()[0]['msg']}") from e
        return await self.analyze(request)

