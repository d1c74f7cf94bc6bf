"""
Asset Models for deckforge

Candidate visuals returned by asset sources, the query that drives curation
and the ranked recommendation handed to the renderer.
"""

from typing import List, Optional, Tuple
from pydantic import BaseModel, Field
from enum import Enum

from .content import Audience


class AssetType(str, Enum):
    ICON = "icon"
    IMAGE = "image"
    VIDEO = "video"
    CHART = "chart"
    DIAGRAM = "diagram"
    LOGO = "logo"


class AssetLicense(str, Enum):
    FREE = "free"
    ATTRIBUTION = "attribution"
    PREMIUM = "premium"


class AssetStyle(str, Enum):
    """Visual register requested from asset sources."""
    PROFESSIONAL = "professional"
    CASUAL = "casual"
    TECHNICAL = "technical"
    CREATIVE = "creative"


class AssetDimensions(BaseModel):
    width: int = Field(..., ge=0)
    height: int = Field(..., ge=0)

    class Config:
        frozen = True


class AssetMetadata(BaseModel):
    """One candidate visual from an asset source."""
    id: str = Field(..., description="Identifier unique within its source")
    type: AssetType
    source: str = Field(..., description="Provider tag (unsplash, iconify, freepik, local, ...)")
    url: str
    thumbnail_url: Optional[str] = None
    alt_text: str = ""
    tags: Tuple[str, ...] = ()
    semantic_score: float = Field(default=0.0, ge=0.0, le=1.0)
    brand_compliance: bool = True
    cultural_appropriateness: bool = True
    license: AssetLicense = AssetLicense.FREE
    dimensions: Optional[AssetDimensions] = None

    class Config:
        frozen = True

    @property
    def key(self) -> Tuple[str, str]:
        """Identity of the asset across sources."""
        return (self.source, self.id)

    @property
    def is_compliant(self) -> bool:
        return self.brand_compliance and self.cultural_appropriateness


class StyleFilter(BaseModel):
    """Search hints derived from the preferred asset style."""
    color: Optional[str] = None
    orientation: Optional[str] = None
    keywords: Tuple[str, ...] = ()

    class Config:
        frozen = True


class BrandGuidelines(BaseModel):
    """Visual vocabulary an asset must match to count as on-brand."""
    name: str
    colors: Tuple[str, ...] = ()
    style: Optional[str] = None

    class Config:
        frozen = True


class AssetQuery(BaseModel):
    """Input to AssetCurator.curate()."""
    content_context: str = ""
    slide_type: str = Field(..., description="Slide role, e.g. hero, evidence, process")
    target_audience: Audience = Audience.GENERAL
    brand_guidelines: Optional[str] = None
    cultural_context: Optional[str] = None
    preferred_style: Optional[AssetStyle] = None

    class Config:
        frozen = True


class AssetRecommendation(BaseModel):
    """Ranked, compliant shortlist of assets for one slide."""
    assets: List[AssetMetadata] = Field(default_factory=list, max_length=5)
    reasoning: str = ""
    confidence_score: float = Field(default=0.0, ge=0.0, le=1.0)
    fallback_options: List[AssetMetadata] = Field(default_factory=list, max_length=3)

    class Config:
        frozen = True

    @property
    def primary_asset(self) -> Optional[AssetMetadata]:
        return self.assets[0] if self.assets else None
