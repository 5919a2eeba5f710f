"""REST API endpoints for food analysis.

Images arrive as multipart uploads; the MIME type sent to the model is
resolved from the declared content type and the filename.
"""

from typing import Any, Dict

import structlog
from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from pydantic import BaseModel, Field

from scanmyfood.api.dependencies import get_analysis_service
from scanmyfood.domain.analysis.mime import resolve_mime_type
from scanmyfood.domain.analysis.models import AnalysisMode, ImageAttachment
from scanmyfood.domain.analysis.service import FoodAnalysisService

logger = structlog.get_logger(__name__)

# Maximum upload size: 10MB
MAX_FILE_SIZE = 10 * 1024 * 1024

router = APIRouter(prefix="/api/v1/analysis", tags=["analysis"])


class DescriptionInput(BaseModel):
    """Request body for text-based meal analysis."""

    description: str = Field(..., min_length=1, max_length=4000)


class AnalysisResponse(BaseModel):
    """Analysis mode plus the JSON object returned by the model."""

    mode: AnalysisMode
    result: Dict[str, Any]


async def read_image(file: UploadFile) -> ImageAttachment:
    """Read an upload into an ImageAttachment.

    Raises:
        HTTPException: If the file is empty or too large
    """
    data = await file.read()
    if not data:
        raise HTTPException(status_code=400, detail=f"Empty file: {file.filename or 'upload'}")
    if len(data) > MAX_FILE_SIZE:
        raise HTTPException(
            status_code=413,
            detail=f"File too large. Maximum size: {MAX_FILE_SIZE // (1024 * 1024)}MB",
        )

    mime_type = resolve_mime_type(file.content_type, file.filename)
    logger.debug(
        "Image received",
        file_name=file.filename,
        mime_type=mime_type,
        size=len(data),
    )
    return ImageAttachment(data=data, mime_type=mime_type)


@router.post("/product", response_model=AnalysisResponse)
async def analyze_product(
    front_image: UploadFile = File(..., description="Product front image"),
    label_image: UploadFile = File(..., description="Nutrition label image"),
    service: FoodAnalysisService = Depends(get_analysis_service),
) -> AnalysisResponse:
    """Analyze a packaged product from its front image and nutrition label.

    Example:
        ```bash
        curl -X POST http://localhost:8080/api/v1/analysis/product \\
          -F "front_image=@front.jpg" -F "label_image=@label.png"
        ```
    """
    front = await read_image(front_image)
    label = await read_image(label_image)
    result = await service.analyze_product_images(front, label)
    return AnalysisResponse(mode=AnalysisMode.PRODUCT_LABEL, result=result)


@router.post("/food-image", response_model=AnalysisResponse)
async def analyze_food_image(
    image: UploadFile = File(..., description="Photo of the meal"),
    service: FoodAnalysisService = Depends(get_analysis_service),
) -> AnalysisResponse:
    """Analyze a single photo of a plate or meal."""
    attachment = await read_image(image)
    result = await service.analyze_food_image(attachment)
    return AnalysisResponse(mode=AnalysisMode.FOOD_IMAGE, result=result)


@router.post("/description", response_model=AnalysisResponse)
async def analyze_description(
    body: DescriptionInput,
    service: FoodAnalysisService = Depends(get_analysis_service),
) -> AnalysisResponse:
    """Analyze a free-text meal description."""
    result = await service.analyze_food_description(body.description)
    return AnalysisResponse(mode=AnalysisMode.MEAL_DESCRIPTION, result=result)
