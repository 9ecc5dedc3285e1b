"""Assistant router - AI generated reports and evolution rewriting"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import get_current_user
from ...config import AI_RATE_LIMIT_PER_HOUR
from ...database import get_db
from ...models import User
from ...rate_limiter import create_rate_limiter
from .gateway import AIGateway, get_ai_gateway
from .schemas import ImproveEvolutionRequest, ImproveEvolutionResponse, ReportRequest
from .service import AssistantService

router = APIRouter(prefix="/assistant", tags=["Assistant"])

assistant_rate_limit = create_rate_limiter(
    limit=AI_RATE_LIMIT_PER_HOUR, window_seconds=3600, key_prefix="assistant"
)


def get_assistant_service(
    db: Session = Depends(get_db), gateway: AIGateway = Depends(get_ai_gateway)
) -> AssistantService:
    """Dependency injection for AssistantService"""
    return AssistantService(db, gateway)


@router.post("/reports")
async def generate_report(
    data: ReportRequest,
    current_user: User = Depends(get_current_user),
    _: None = Depends(assistant_rate_limit),
    service: AssistantService = Depends(get_assistant_service),
):
    """Stream a generated report as Server-Sent Events"""
    return await service.generate_report(data, current_user)


@router.post("/improve-evolution", response_model=ImproveEvolutionResponse)
async def improve_evolution(
    data: ImproveEvolutionRequest,
    current_user: User = Depends(get_current_user),
    _: None = Depends(assistant_rate_limit),
    service: AssistantService = Depends(get_assistant_service),
):
    return await service.improve_evolution(data, current_user)
