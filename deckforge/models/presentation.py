"""
Presentation Models for deckforge

The generation request, the merged per-slide record and the
presentation-level aggregates returned by the PipelineOrchestrator.
"""

from typing import List, Optional
from pydantic import BaseModel, Field, field_validator

from .content import Audience, PresentationType
from .layout import LayoutRecommendation
from .assets import AssetRecommendation
from .style import StyleRecommendation


class SlideGenerationRequest(BaseModel):
    """
    Input to PipelineOrchestrator.generate().

    Unknown audience / presentation_type strings degrade to their defaults;
    a missing or non-string content field is a caller error.
    """
    content: str = Field(..., description="Free-form presentation content")
    audience: Audience = Field(default=Audience.GENERAL)
    presentation_type: PresentationType = Field(default=PresentationType.BUSINESS)
    brand_guidelines: Optional[str] = Field(
        default=None,
        description="Brand theme identifier, e.g. 'corporate'"
    )
    time_constraint: Optional[float] = Field(
        default=None,
        gt=0,
        description="Speaking time budget in minutes"
    )
    accessibility_requirements: List[str] = Field(
        default_factory=list,
        description="Free-text requirement tags (advisory)"
    )

    class Config:
        frozen = True
        extra = "forbid"

    @field_validator("audience", mode="before")
    @classmethod
    def _coerce_audience(cls, value):
        return Audience.coerce(value)

    @field_validator("presentation_type", mode="before")
    @classmethod
    def _coerce_presentation_type(cls, value):
        return PresentationType.coerce(value)


class GeneratedSlide(BaseModel):
    """Merge point of the four stages for one recommended slide."""
    id: str = Field(..., description="Positional id: slide_1, slide_2, ...")
    type: str
    title: str
    content: str = Field(..., description="Content points joined with ', '")
    content_points: List[str] = Field(default_factory=list, description="Talking points in recommended order")
    layout: LayoutRecommendation
    assets: AssetRecommendation
    style: StyleRecommendation
    markdown: str
    estimated_time: int = Field(..., ge=0, description="Seconds")

    class Config:
        frozen = True


class PresentationMetadata(BaseModel):
    total_slides: int = Field(..., ge=0)
    estimated_duration: int = Field(..., ge=0, description="Seconds")
    complexity_score: int = Field(..., ge=0, le=10)
    accessibility_score: float = Field(..., ge=0.0, le=1.0)
    brand_compliance: float = Field(..., ge=0.0, le=1.0)

    class Config:
        frozen = True


class QualityMetrics(BaseModel):
    content_quality: float = Field(..., ge=0.0, le=1.0)
    visual_appeal: float = Field(..., ge=0.0, le=1.0)
    accessibility: float = Field(..., ge=0.0, le=1.0)
    brand_alignment: float = Field(..., ge=0.0, le=1.0)
    overall_score: float = Field(..., ge=0.0, le=1.0)

    class Config:
        frozen = True


class SlideGenerationResult(BaseModel):
    """Everything the external renderer and reporting tools consume."""
    slides: List[GeneratedSlide] = Field(default_factory=list)
    presentation_metadata: PresentationMetadata
    quality_metrics: QualityMetrics
    optimization_suggestions: List[str] = Field(default_factory=list)

    class Config:
        frozen = True
