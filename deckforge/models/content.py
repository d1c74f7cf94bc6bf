"""
Content Analysis Models for deckforge

Data structures produced by the ContentAnalyzer: the presentation-level
analysis and one SlideRecommendation per slide to generate.
"""

from typing import List
from pydantic import BaseModel, Field
from enum import Enum


class Audience(str, Enum):
    """Target audience of a presentation."""
    EXECUTIVE = "executive"
    TECHNICAL = "technical"
    GENERAL = "general"

    @classmethod
    def coerce(cls, value) -> "Audience":
        """Resolve any input to an Audience, defaulting to GENERAL."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return cls.GENERAL


class PresentationType(str, Enum):
    """Kind of presentation being generated."""
    BUSINESS = "business"
    TECHNICAL = "technical"
    CREATIVE = "creative"
    EDUCATIONAL = "educational"

    @classmethod
    def coerce(cls, value) -> "PresentationType":
        """Resolve any input to a PresentationType, defaulting to BUSINESS."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return cls.BUSINESS


class SlideType(str, Enum):
    """Slide roles the ContentAnalyzer can recommend."""
    HERO = "hero"
    PROBLEM = "problem"
    SOLUTION = "solution"
    EVIDENCE = "evidence"
    ACTION = "action"
    SUMMARY = "summary"


class NarrativeFlow(str, Enum):
    """Narrative framing applied to the whole deck."""
    PROBLEM_SOLUTION = "problem_solution"
    BEFORE_AFTER = "before_after"
    FEATURE_BENEFIT = "feature_benefit"
    PYRAMID_PRINCIPLE = "pyramid_principle"


class InformationHierarchy(str, Enum):
    PRIMARY = "primary"
    SECONDARY = "secondary"
    SUPPORTING = "supporting"


class MessagingFramework(str, Enum):
    MCKINSEY_SCCE = "mckinsey_scce"
    STORYTELLING_ARC = "storytelling_arc"
    CONSULTATIVE_SELLING = "consultative_selling"


class ContentDensity(str, Enum):
    """Coarse amount of information a deck has to convey."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @classmethod
    def from_cognitive_load(cls, score: int) -> "ContentDensity":
        """Map a cognitive load score (0-10) to a density bucket."""
        if score > 7:
            return cls.HIGH
        if score > 4:
            return cls.MEDIUM
        return cls.LOW

    @classmethod
    def coerce(cls, value) -> "ContentDensity":
        """Resolve any input to a ContentDensity, defaulting to MEDIUM."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return cls.MEDIUM


class SlideRecommendation(BaseModel):
    """An abstract, not-yet-rendered description of one slide."""
    slide_type: SlideType = Field(..., description="Role of the slide in the narrative")
    priority: int = Field(..., ge=1, description="Ordering key, ascending = earlier")
    estimated_time: int = Field(..., ge=0, description="Speaking time in seconds")
    content_points: List[str] = Field(default_factory=list, description="Talking points")

    class Config:
        frozen = True


class ContentAnalysisResult(BaseModel):
    """Structured analysis of the raw presentation content."""
    narrative_flow: NarrativeFlow
    information_hierarchy: InformationHierarchy = InformationHierarchy.PRIMARY
    messaging_framework: MessagingFramework = MessagingFramework.MCKINSEY_SCCE
    word_count: int = Field(default=0, ge=0)
    cognitive_load_score: int = Field(..., ge=0, le=10, description="min(10, words // 50)")
    key_messages: List[str] = Field(default_factory=list, max_length=5)
    audience_adaptation: Audience
    content_density: ContentDensity
    slide_recommendations: List[SlideRecommendation] = Field(default_factory=list)

    class Config:
        frozen = True
