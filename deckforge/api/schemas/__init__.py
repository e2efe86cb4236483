"""API request/response schemas."""

from .base import ErrorResponse
from .session import (
    AssetSummary,
    CredentialsRequest,
    CredentialsResponse,
    PlanModel,
    PlanRequest,
    RenderProgressResponse,
    SlideImageResponse,
    SlideModel,
    SourcesResponse,
)

__all__ = [
    "AssetSummary",
    "CredentialsRequest",
    "CredentialsResponse",
    "ErrorResponse",
    "PlanModel",
    "PlanRequest",
    "RenderProgressResponse",
    "SlideImageResponse",
    "SlideModel",
    "SourcesResponse",
]
