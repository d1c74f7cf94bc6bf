"""
Style Models for deckforge

Design tokens, component styles and the brand theme registry.

The registry holds the built-in brand themes. StyleComposer resolves a
brand_guidelines identifier against it and falls back to the configured
default brand for anything it does not know. Registry entries are never
handed out directly; lookups return deep copies.
"""

from types import MappingProxyType
from typing import Dict, List, Mapping, Tuple
from pydantic import BaseModel, Field
from enum import Enum


class TokenCategory(str, Enum):
    COLOR = "color"
    TYPOGRAPHY = "typography"
    SPACING = "spacing"
    SHADOW = "shadow"
    BORDER = "border"
    ANIMATION = "animation"


class TokenScope(str, Enum):
    GLOBAL = "global"
    COMPONENT = "component"
    THEME = "theme"


class DesignToken(BaseModel):
    """A named, typed style value emitted as a CSS custom property."""
    name: str = Field(..., description="Custom property name including leading '--'")
    value: str
    category: TokenCategory
    scope: TokenScope = TokenScope.GLOBAL

    class Config:
        frozen = True


class ComponentStyle(BaseModel):
    """Base styles of one component plus named variants and breakpoints."""
    component: str = Field(..., description="CSS class name without the leading dot")
    styles: Dict[str, str] = Field(default_factory=dict)
    variants: Dict[str, Dict[str, str]] = Field(default_factory=dict)
    responsive: Dict[str, Dict[str, str]] = Field(default_factory=dict)

    class Config:
        frozen = True


class StyleTheme(BaseModel):
    """A named bundle of tokens and component styles."""
    name: str
    tokens: Tuple[DesignToken, ...] = ()
    components: Tuple[ComponentStyle, ...] = ()
    brand_alignment: float = Field(default=1.0, ge=0.0, le=1.0)
    accessibility_score: float = Field(default=1.0, ge=0.0, le=1.0)

    class Config:
        frozen = True


class AccessibilityReport(BaseModel):
    score: float = Field(..., ge=0.0, le=1.0)
    issues: List[str] = Field(default_factory=list)

    class Config:
        frozen = True


class StyleRecommendation(BaseModel):
    """Theme plus request-specific tokens, overrides and synthesized CSS."""
    theme: StyleTheme
    custom_tokens: List[DesignToken] = Field(default_factory=list)
    component_overrides: List[ComponentStyle] = Field(default_factory=list)
    css_framework: str
    reasoning: str
    accessibility: AccessibilityReport

    class Config:
        frozen = True

    @property
    def all_tokens(self) -> List[DesignToken]:
        return list(self.theme.tokens) + list(self.custom_tokens)


# ============================================================================
# BRAND THEME REGISTRY
# ============================================================================

DEFAULT_BRAND_ID = "corporate"


def _tokens(category: TokenCategory, pairs) -> List[DesignToken]:
    return [DesignToken(name=name, value=value, category=category) for name, value in pairs]


# Typography, spacing, shadows and radii are shared by every brand
_TYPOGRAPHY_SCALE = [
    ("--font-weight-normal", "400"),
    ("--font-weight-medium", "500"),
    ("--font-weight-bold", "700"),
    ("--font-size-xs", "0.75rem"),
    ("--font-size-sm", "0.875rem"),
    ("--font-size-base", "1rem"),
    ("--font-size-lg", "1.125rem"),
    ("--font-size-xl", "1.25rem"),
    ("--font-size-2xl", "1.5rem"),
    ("--font-size-3xl", "1.875rem"),
    ("--font-size-4xl", "2.25rem"),
]

_SPACING_SCALE = [
    ("--spacing-1", "0.25rem"),
    ("--spacing-2", "0.5rem"),
    ("--spacing-3", "0.75rem"),
    ("--spacing-4", "1rem"),
    ("--spacing-6", "1.5rem"),
    ("--spacing-8", "2rem"),
    ("--spacing-12", "3rem"),
    ("--spacing-16", "4rem"),
]

_SHADOWS = [
    ("--shadow-sm", "0 1px 2px 0 rgba(0, 0, 0, 0.05)"),
    ("--shadow-md", "0 4px 6px -1px rgba(0, 0, 0, 0.1)"),
    ("--shadow-lg", "0 10px 15px -3px rgba(0, 0, 0, 0.1)"),
]

_RADII = [
    ("--border-radius-sm", "0.125rem"),
    ("--border-radius-md", "0.375rem"),
    ("--border-radius-lg", "0.5rem"),
    ("--border-radius-xl", "0.75rem"),
]


def _brand_tokens(palette, font_primary: str) -> List[DesignToken]:
    return (
        _tokens(TokenCategory.COLOR, palette)
        + _tokens(TokenCategory.TYPOGRAPHY, [("--font-primary", font_primary)] + _TYPOGRAPHY_SCALE)
        + _tokens(TokenCategory.SPACING, _SPACING_SCALE)
        + _tokens(TokenCategory.SHADOW, _SHADOWS)
        + _tokens(TokenCategory.BORDER, _RADII)
    )


# Component base styles only reference tokens, so every brand shares them
BASE_COMPONENTS: Tuple[ComponentStyle, ...] = (
    ComponentStyle(
        component="slide-header",
        styles={
            "background": "linear-gradient(135deg, var(--brand-primary) 0%, var(--brand-secondary) 100%)",
            "color": "var(--brand-on-primary)",
            "padding": "var(--spacing-8) var(--spacing-12)",
            "border-radius": "var(--border-radius-lg)",
            "margin-bottom": "var(--spacing-6)",
        },
        variants={
            "hero": {
                "font-size": "var(--font-size-4xl)",
                "text-align": "center",
                "padding": "var(--spacing-12) var(--spacing-16)",
            },
            "content": {
                "font-size": "var(--font-size-2xl)",
                "text-align": "left",
            },
        },
    ),
    ComponentStyle(
        component="slide-content",
        styles={
            "color": "var(--brand-text)",
            "font-family": "var(--font-primary)",
            "line-height": "1.6",
            "padding": "var(--spacing-6)",
        },
        variants={
            "high-density": {
                "font-size": "var(--font-size-sm)",
                "line-height": "1.4",
            },
            "low-density": {
                "font-size": "var(--font-size-lg)",
                "line-height": "1.8",
            },
        },
    ),
    ComponentStyle(
        component="call-to-action",
        styles={
            "background": "linear-gradient(135deg, var(--brand-accent) 0%, var(--brand-accent-alt) 100%)",
            "color": "var(--brand-on-primary)",
            "padding": "var(--spacing-4) var(--spacing-8)",
            "border-radius": "var(--border-radius-md)",
            "font-weight": "var(--font-weight-bold)",
            "text-align": "center",
            "box-shadow": "var(--shadow-md)",
        },
    ),
    ComponentStyle(
        component="data-table",
        styles={
            "border": "2px solid var(--brand-accent)",
            "border-radius": "var(--border-radius-lg)",
            "overflow": "hidden",
        },
        variants={
            "header": {
                "background": "var(--brand-accent)",
                "color": "var(--brand-on-primary)",
                "font-weight": "var(--font-weight-bold)",
            },
            "cell": {
                "padding": "var(--spacing-3)",
                "border-bottom": "1px solid var(--brand-muted)",
            },
        },
    ),
)


_BRAND_THEMES: Dict[str, StyleTheme] = {
    "corporate": StyleTheme(
        name="corporate",
        tokens=_brand_tokens(
            [
                ("--brand-primary", "#095078"),
                ("--brand-secondary", "#ACBCC8"),
                ("--brand-accent", "#E84B37"),
                ("--brand-accent-alt", "#E75300"),
                ("--brand-text", "#425563"),
                ("--brand-text-muted", "#595959"),
                ("--brand-muted", "#A0AEC0"),
                ("--brand-background", "#f4f4f4"),
                ("--brand-on-primary", "#FFFFFF"),
            ],
            "Inter, system-ui, sans-serif",
        ),
        components=BASE_COMPONENTS,
        brand_alignment=1.0,
        accessibility_score=0.95,
    ),
    "midnight": StyleTheme(
        name="midnight",
        tokens=_brand_tokens(
            [
                ("--brand-primary", "#1E293B"),
                ("--brand-secondary", "#334155"),
                ("--brand-accent", "#38BDF8"),
                ("--brand-accent-alt", "#0EA5E9"),
                ("--brand-text", "#E2E8F0"),
                ("--brand-text-muted", "#94A3B8"),
                ("--brand-muted", "#475569"),
                ("--brand-background", "#0F172A"),
                ("--brand-on-primary", "#F8FAFC"),
            ],
            "'IBM Plex Sans', system-ui, sans-serif",
        ),
        components=BASE_COMPONENTS,
        brand_alignment=1.0,
        accessibility_score=0.9,
    ),
}

BRAND_THEMES: Mapping[str, StyleTheme] = MappingProxyType(_BRAND_THEMES)


def normalize_brand_id(brand_id) -> str:
    """'Corporate', 'corporate_theme ' -> 'corporate', 'corporate-theme'."""
    return str(brand_id or "").strip().lower().replace("_", "-")
