"""
Export endpoints: slide archive and debug log download.
"""

from fastapi import APIRouter, Depends, HTTPException, Response, status
from fastapi.responses import PlainTextResponse

from deckforge.application.services import GenerationSession
from deckforge.infra.config.dependencies import get_session
from deckforge.infra.export import log_export_filename

router = APIRouter()


@router.get("/archive")
async def download_archive(session: GenerationSession = Depends(get_session)) -> Response:
    if session.plan is None:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="No plan yet")

    archive = session.build_archive()
    if archive is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No rendered slides")

    return Response(
        content=archive.content,
        media_type="application/zip",
        headers={"Content-Disposition": f'attachment; filename="{archive.filename}"'},
    )


@router.get("/logs", response_class=PlainTextResponse)
async def download_logs(session: GenerationSession = Depends(get_session)) -> PlainTextResponse:
    return PlainTextResponse(
        session.export_logs(),
        headers={"Content-Disposition": f'attachment; filename="{log_export_filename()}"'},
    )
