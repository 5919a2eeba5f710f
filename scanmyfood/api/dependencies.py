"""FastAPI dependencies resolving services stored on ``app.state``."""

from fastapi import Request

from scanmyfood.domain.analysis.service import FoodAnalysisService
from scanmyfood.domain.shared.errors import ConfigurationError
from scanmyfood.domain.user.ports import IUserRepository


def get_analysis_service(request: Request) -> FoodAnalysisService:
    """Return the analysis service or the configuration error captured at startup."""
    service = getattr(request.app.state, "analysis_service", None)
    if service is None:
        error = getattr(request.app.state, "analysis_error", None)
        raise error or ConfigurationError("Analysis service not configured")
    return service  # type: ignore[no-any-return]


def get_user_repository(request: Request) -> IUserRepository:
    return request.app.state.user_repository  # type: ignore[no-any-return]
