"""
Session API schemas: credentials, sources, plans and render progress.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from deckforge.application.use_cases import BatchProgress
from deckforge.domain.entities import PresentationPlan, SlideData
from deckforge.domain.value_objects import BatchStatus, Language, ProviderId


# ---------- CREDENTIALS ----------
class CredentialsRequest(BaseModel):
    provider: ProviderId = Field(ProviderId.MANAGED, description="Generation backend")
    api_key: str = Field(..., min_length=1, description="API key for the provider")


class CredentialsResponse(BaseModel):
    provider: ProviderId
    configured: bool


# ---------- SOURCES ----------
class AssetSummary(BaseModel):
    id: str
    name: str


class SourcesResponse(BaseModel):
    document_chars: int = Field(..., ge=0, description="Length of aggregated text")
    images: List[AssetSummary] = Field(default_factory=list)
    urls: List[str] = Field(default_factory=list)


# ---------- PLAN ----------
class PlanRequest(BaseModel):
    slide_count: int = Field(..., ge=1, le=99, description="Exact number of slides")
    output_language: Language = Field(Language.EN)
    style: Optional[str] = Field(None, max_length=2_000)
    requirements: Optional[str] = Field(None, max_length=5_000)


class SlideModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., min_length=1)
    title: str
    bullets: List[str] = Field(default_factory=list)
    visual_note: str = Field("", alias="visualNote")
    selected_image_ids: List[str] = Field(default_factory=list, alias="selectedImageIds")

    @classmethod
    def from_entity(cls, slide: SlideData) -> "SlideModel":
        return cls.model_validate(slide.to_dict())

    def to_entity(self) -> SlideData:
        return SlideData.from_dict(self.model_dump(by_alias=True))


class PlanModel(BaseModel):
    topic: str
    style: Optional[str] = None
    requirements: Optional[str] = None
    slides: List[SlideModel]

    @classmethod
    def from_entity(cls, plan: PresentationPlan) -> "PlanModel":
        return cls.model_validate(plan.to_dict())

    def to_entity(self) -> PresentationPlan:
        return PresentationPlan.from_dict(self.model_dump(by_alias=True))


# ---------- RENDERING ----------
class RenderProgressResponse(BaseModel):
    status: BatchStatus
    current_index: Optional[int] = None
    total: int
    rendered: int
    failed: List[int] = Field(default_factory=list)
    notice: Optional[str] = None
    requires_reauth: bool = False

    @classmethod
    def from_progress(cls, progress: BatchProgress) -> "RenderProgressResponse":
        return cls(
            status=progress.status,
            current_index=progress.current_index,
            total=progress.total,
            rendered=progress.rendered,
            failed=progress.failed,
            notice=progress.notice,
            requires_reauth=progress.requires_reauth,
        )


class SlideImageResponse(BaseModel):
    index: int
    slide_id: str
    image: str = Field(..., description="data:image/png;base64 URI")
