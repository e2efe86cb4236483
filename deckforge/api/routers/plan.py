"""
Plan endpoints: generate, read and edit the presentation plan.
"""

from fastapi import APIRouter, Depends, HTTPException, status

from deckforge.api.schemas import PlanModel, PlanRequest
from deckforge.application.services import GenerationSession
from deckforge.infra.config.dependencies import get_session
from deckforge.infra.config.logging_config import get_logger

router = APIRouter(prefix="/plan")
log = get_logger("api.plan")


@router.post("", response_model=PlanModel)
async def generate_plan(
    request: PlanRequest,
    session: GenerationSession = Depends(get_session),
) -> PlanModel:
    """
    Generate a plan from the uploaded sources.

    Planning failures never surface here: the response is a placeholder plan
    with the requested number of slides instead.
    """
    log.info(
        "plan.generate.request",
        slide_count=request.slide_count,
        language=request.output_language.value,
        has_style=bool(request.style),
    )
    try:
        plan = await session.create_plan(
            request.slide_count,
            output_language=request.output_language,
            style=request.style,
            requirements=request.requirements,
        )
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    return PlanModel.from_entity(plan)


@router.get("", response_model=PlanModel)
async def get_plan(session: GenerationSession = Depends(get_session)) -> PlanModel:
    if session.plan is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No plan yet")
    return PlanModel.from_entity(session.plan)


@router.put("", response_model=PlanModel)
async def update_plan(
    request: PlanModel,
    session: GenerationSession = Depends(get_session),
) -> PlanModel:
    """Replace the plan with an edited version of the same length."""
    try:
        plan = session.update_plan(request.to_entity())
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return PlanModel.from_entity(plan)
