"""
Session endpoints: credentials, source uploads and project reset.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile, status

from deckforge.api.schemas import (
    AssetSummary,
    CredentialsRequest,
    CredentialsResponse,
    SourcesResponse,
)
from deckforge.application.services import GenerationSession
from deckforge.infra.config.dependencies import (
    get_content_aggregator,
    get_session,
    reset_session,
)
from deckforge.infra.config.logging_config import get_logger
from deckforge.infra.content import ContentAggregator, SourceFile

router = APIRouter()
log = get_logger("api.session")


@router.post("/credentials", response_model=CredentialsResponse)
async def configure_credentials(
    request: CredentialsRequest,
    session: GenerationSession = Depends(get_session),
) -> CredentialsResponse:
    """Set the provider and API key; also lifts a quota/permission lock."""
    session.configure(request.provider, request.api_key)
    return CredentialsResponse(provider=session.provider, configured=True)


@router.post("/sources", response_model=SourcesResponse)
async def upload_sources(
    files: Optional[List[UploadFile]] = File(None),
    urls: Optional[List[str]] = Form(None),
    session: GenerationSession = Depends(get_session),
    aggregator: ContentAggregator = Depends(get_content_aggregator),
) -> SourcesResponse:
    """Aggregate uploaded documents and images into the session."""
    sources = [
        SourceFile(name=upload.filename or "upload", content=await upload.read())
        for upload in files or []
    ]
    urls = [url.strip() for url in urls or [] if url.strip()]
    content = aggregator.aggregate(sources)
    session.add_sources(content, urls)
    log.info("sources.added", files=len(sources), images=len(content.images), urls=len(urls))

    return SourcesResponse(
        document_chars=len(session.content.text),
        images=[AssetSummary(id=image.id, name=image.name) for image in session.content.images],
        urls=session.urls,
    )


@router.post("/reset", status_code=status.HTTP_204_NO_CONTENT)
async def reset() -> None:
    """Discard the current session and start a new project."""
    reset_session()
    log.info("session.reset")
