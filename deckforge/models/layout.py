"""
Layout Models for deckforge

Layout patterns are catalog entries independent of content; a
LayoutRecommendation binds one pattern to a slide with its scores.
"""

from typing import Tuple
from pydantic import BaseModel, Field
from enum import Enum


class GridSystem(str, Enum):
    TWELVE_COLUMN = "12-column"
    EIGHT_COLUMN = "8-column"
    FLEXBOX = "flexbox"
    CSS_GRID = "css-grid"


class VisualHierarchy(str, Enum):
    Z_PATTERN = "Z-pattern"
    F_PATTERN = "F-pattern"
    CENTER_FOCUSED = "center-focused"
    LEFT_ALIGNED = "left-aligned"


class LayoutType(str, Enum):
    HERO = "hero"
    SPLIT = "split"
    GRID = "grid"
    TIMELINE = "timeline"
    COMPARISON = "comparison"
    PROCESS_FLOW = "process_flow"


class LayoutPattern(BaseModel):
    """A named grid/visual-hierarchy template."""
    name: str = Field(..., description="Pattern identifier (e.g., 'hero-centered')")
    grid_system: GridSystem
    visual_hierarchy: VisualHierarchy
    layout_type: LayoutType
    responsive_breakpoints: Tuple[str, ...] = Field(
        default=(),
        description="Breakpoints the pattern adapts to: mobile, tablet, desktop"
    )
    best_for: Tuple[str, ...] = Field(default=(), description="Use-case tags")

    class Config:
        frozen = True

    @property
    def supports_mobile(self) -> bool:
        return "mobile" in self.responsive_breakpoints


class LayoutRecommendation(BaseModel):
    """The layout chosen for one slide."""
    pattern: LayoutPattern
    confidence_score: float = Field(..., ge=0.0, le=1.0, description="Rule confidence (0-1)")
    accessibility_score: float = Field(..., ge=0.0, le=1.0, description="Layout accessibility (0-1)")
    reason: str = Field(..., description="Explanation of why this layout was chosen")
    css_framework: str = Field(..., description="Container CSS for the pattern's grid system")

    class Config:
        frozen = True
