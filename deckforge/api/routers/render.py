"""
Render endpoints: batch rendering, progress and single-slide regeneration.
"""

import base64

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Response, status

from deckforge.api.schemas import RenderProgressResponse, SlideImageResponse
from deckforge.application.services import GenerationSession
from deckforge.domain.entities import split_data_uri
from deckforge.infra.config.dependencies import get_session
from deckforge.infra.config.logging_config import get_logger

router = APIRouter()
log = get_logger("api.render")


async def _run_batch(session: GenerationSession) -> None:
    await session.render_all()


@router.post(
    "/render",
    response_model=RenderProgressResponse,
    status_code=status.HTTP_202_ACCEPTED,
)
async def start_render(
    background_tasks: BackgroundTasks,
    session: GenerationSession = Depends(get_session),
) -> RenderProgressResponse:
    """Start rendering every slide that has no image yet."""
    if session.plan is None:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="No plan yet")
    try:
        session.controller.ensure_ready()
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))

    background_tasks.add_task(_run_batch, session)
    log.info("render.batch.scheduled", slides=session.plan.slide_count)
    return RenderProgressResponse.from_progress(session.controller.progress)


@router.get("/render", response_model=RenderProgressResponse)
async def render_progress(
    session: GenerationSession = Depends(get_session),
) -> RenderProgressResponse:
    return RenderProgressResponse.from_progress(session.controller.progress)


@router.post("/slides/{index}/render", response_model=SlideImageResponse)
async def render_single_slide(
    index: int,
    session: GenerationSession = Depends(get_session),
) -> SlideImageResponse:
    """Regenerate one slide (0-based index) and return its image."""
    if session.plan is None:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="No plan yet")
    try:
        image = await session.render_slide(index)
    except IndexError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))

    return SlideImageResponse(index=index, slide_id=session.plan.slides[index].id, image=image)


@router.get("/slides/{index}/image")
async def get_slide_image(
    index: int,
    session: GenerationSession = Depends(get_session),
) -> Response:
    results = session.controller.results
    if not 0 <= index < len(results) or not results[index]:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Slide not rendered")

    mime_type, payload = split_data_uri(results[index])
    return Response(content=base64.b64decode(payload), media_type=mime_type)
