"""
Style Composer for deckforge

Builds the StyleRecommendation for one slide:

    brand theme (catalog tokens + base components)
      + context tokens (audience, density, slide type)
      + component overrides (comparison, timeline, dense content)
      -> one synthesized CSS string

CSS synthesis is a pure, order-preserving fold over the token and component
lists, so identical inputs always produce identical CSS text.
"""

import re
from typing import Dict, List, Optional, Sequence

from config.settings import Settings, get_settings
from deckforge.models.content import Audience, ContentDensity
from deckforge.models.style import (
    BRAND_THEMES,
    DEFAULT_BRAND_ID,
    AccessibilityReport,
    ComponentStyle,
    DesignToken,
    StyleRecommendation,
    StyleTheme,
    TokenCategory,
    TokenScope,
    normalize_brand_id
)
from deckforge.utils.logger import setup_logger
from deckforge.utils.scoring import clamp

logger = setup_logger(__name__)


MIN_READABLE_FONT_REM = 0.875
ACCESSIBILITY_PENALTY = 0.1
PX_PER_REM = 16.0

_LEADING_NUMBER = re.compile(r'^\s*(-?\d+(?:\.\d+)?)\s*(rem|em|px)?', re.IGNORECASE)

# Responsive keys on ComponentStyle -> media query condition
MEDIA_QUERIES: Dict[str, str] = {
    "mobile": "max-width: 768px",
    "tablet": "min-width: 769px) and (max-width: 1024px",
    "desktop": "min-width: 1025px",
}
DEFAULT_MEDIA_QUERY = "min-width: 769px"

_BASE_RULES = """/* Base styles */
.slide-deck {
  font-family: var(--font-primary);
  color: var(--brand-text);
  background: var(--brand-background);
  line-height: 1.6;
}

.slide {
  padding: var(--spacing-8);
  min-height: 100vh;
  display: flex;
  flex-direction: column;
}"""

_UTILITY_RULES = """/* Utility classes */
.text-center { text-align: center; }
.text-left { text-align: left; }
.text-right { text-align: right; }

.font-bold { font-weight: var(--font-weight-bold); }
.font-medium { font-weight: var(--font-weight-medium); }

.text-primary { color: var(--brand-primary); }
.text-accent { color: var(--brand-accent); }
.text-muted { color: var(--brand-text-muted); }

.bg-primary { background: var(--brand-primary); }
.bg-accent { background: var(--brand-accent); }
.bg-light { background: var(--brand-background); }

.shadow-sm { box-shadow: var(--shadow-sm); }
.shadow-md { box-shadow: var(--shadow-md); }
.shadow-lg { box-shadow: var(--shadow-lg); }

.rounded-sm { border-radius: var(--border-radius-sm); }
.rounded-md { border-radius: var(--border-radius-md); }
.rounded-lg { border-radius: var(--border-radius-lg); }

/* Responsive utilities */
@media (max-width: 768px) {
  .slide {
    padding: var(--spacing-4);
  }

  .desktop-only {
    display: none;
  }
}

@media (min-width: 769px) {
  .mobile-only {
    display: none;
  }
}"""


# ============================================================================
# BRAND THEME LOOKUP
# ============================================================================

def get_brand_theme(name: Optional[str], default: Optional[str] = None) -> StyleTheme:
    """
    Resolve a brand identifier to a theme.

    Args:
        name: Brand identifier (case/underscore insensitive)
        default: Brand used when name is unknown (itself falling back to corporate)

    Returns:
        A private copy of the matching theme, or of the default theme if not found
    """
    theme = BRAND_THEMES.get(normalize_brand_id(name))
    if theme is None:
        fallback_id = normalize_brand_id(default)
        if fallback_id not in BRAND_THEMES:
            fallback_id = DEFAULT_BRAND_ID
        logger.warning(f"Unknown brand guidelines '{name}', falling back to '{fallback_id}' theme")
        theme = BRAND_THEMES[fallback_id]
    # Component style dicts are mutable; callers must not reach the registry
    return theme.model_copy(deep=True)


def available_brands() -> List[str]:
    """Identifiers of the built-in brand themes."""
    return list(BRAND_THEMES.keys())


# ============================================================================
# CSS SYNTHESIS
# ============================================================================

def _declarations(styles: Dict[str, str], indent: str = "  ") -> str:
    return "".join(f"{indent}{prop}: {value};\n" for prop, value in styles.items())


def generate_component_css(component: ComponentStyle) -> str:
    """Base rule, one `--variant` rule per variant, one @media block per breakpoint."""
    css = f".{component.component} {{\n{_declarations(component.styles)}}}\n"

    for variant, styles in component.variants.items():
        css += f".{component.component}--{variant} {{\n{_declarations(styles)}}}\n"

    for breakpoint, styles in component.responsive.items():
        query = MEDIA_QUERIES.get(breakpoint, DEFAULT_MEDIA_QUERY)
        css += (
            f"@media ({query}) {{\n"
            f"  .{component.component} {{\n{_declarations(styles, indent='    ')}  }}\n"
            f"}}\n"
        )

    return css


def generate_css_framework(
    theme: StyleTheme,
    custom_tokens: Sequence[DesignToken] = (),
    overrides: Sequence[ComponentStyle] = ()
) -> str:
    """
    Synthesize the full stylesheet for a theme plus request-specific layers.

    Order: custom properties, base rules, theme components, overrides,
    utilities.
    """
    tokens = list(theme.tokens) + list(custom_tokens)
    variables = "\n".join(f"  {token.name}: {token.value};" for token in tokens)
    components = "\n".join(
        generate_component_css(component)
        for component in list(theme.components) + list(overrides)
    )

    return (
        f"/* {theme.name} design system */\n"
        f":root {{\n{variables}\n}}\n\n"
        f"{_BASE_RULES}\n\n"
        f"/* Component styles */\n{components}\n"
        f"{_UTILITY_RULES}\n"
    )


# ============================================================================
# ACCESSIBILITY
# ============================================================================

def _font_size_rem(value: str) -> Optional[float]:
    """'0.875rem' -> 0.875, '14px' -> 0.875, 'var(--x)' -> None."""
    match = _LEADING_NUMBER.match(value or "")
    if not match:
        return None
    number = float(match.group(1))
    if (match.group(2) or "").lower() == "px":
        return number / PX_PER_REM
    return number


def validate_accessibility(theme: StyleTheme, extra_tokens: Sequence[DesignToken] = ()) -> AccessibilityReport:
    """
    Check that at least one typography font-size token is readable.

    Args:
        theme: Theme to check
        extra_tokens: Request-specific tokens merged after the theme's

    Returns:
        AccessibilityReport; score is the theme's accessibility score, minus
        0.1 when no readable font size exists
    """
    issues: List[str] = []
    score = theme.accessibility_score

    sizes = [
        _font_size_rem(token.value)
        for token in list(theme.tokens) + list(extra_tokens)
        if token.category == TokenCategory.TYPOGRAPHY and "font-size" in token.name
    ]
    readable = any(size is not None and size >= MIN_READABLE_FONT_REM for size in sizes)

    if not readable:
        issues.append(
            f"Font sizes below recommended minimum ({MIN_READABLE_FONT_REM}rem / "
            f"{int(MIN_READABLE_FONT_REM * PX_PER_REM)}px)"
        )
        score -= ACCESSIBILITY_PENALTY

    return AccessibilityReport(score=clamp(round(score, 4)), issues=issues)


# ============================================================================
# COMPOSER
# ============================================================================

class StyleComposer:
    """
    Composes brand theme, context tokens and overrides for a slide.

    Args:
        settings: Source of DEFAULT_BRAND_GUIDELINES (default: get_settings())
    """

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        self.default_brand = self.settings.DEFAULT_BRAND_GUIDELINES

    def compose(
        self,
        slide_type,
        audience=Audience.GENERAL,
        density=ContentDensity.MEDIUM,
        brand_guidelines: Optional[str] = None
    ) -> StyleRecommendation:
        """
        Compose the style for one slide.

        Args:
            slide_type: SlideType or any slide type string
            audience: Target audience
            density: Presentation content density
            brand_guidelines: Brand theme identifier (default from settings)

        Returns:
            StyleRecommendation with synthesized CSS
        """
        slide_type = str(getattr(slide_type, "value", slide_type) or "").strip().lower()
        audience = Audience.coerce(audience)
        density = ContentDensity.coerce(density)

        theme = get_brand_theme(brand_guidelines or self.default_brand, default=self.default_brand)
        custom_tokens = self.custom_tokens(slide_type, audience, density)
        overrides = self.component_overrides(slide_type, density)

        css = generate_css_framework(theme, custom_tokens, overrides)
        accessibility = validate_accessibility(theme, custom_tokens)

        if accessibility.issues:
            logger.warning(f"Theme '{theme.name}' accessibility issues: {accessibility.issues}")

        return StyleRecommendation(
            theme=theme,
            custom_tokens=custom_tokens,
            component_overrides=overrides,
            css_framework=css,
            reasoning=self._reasoning(slide_type, audience, density, theme, custom_tokens, overrides),
            accessibility=accessibility
        )

    def custom_tokens(self, slide_type: str, audience: Audience, density: ContentDensity) -> List[DesignToken]:
        """Context tokens: audience first, then density, then slide type."""
        tokens: List[DesignToken] = []

        if audience == Audience.EXECUTIVE:
            tokens.append(_component_token("--executive-emphasis", "var(--brand-primary)", TokenCategory.COLOR))
            tokens.append(_component_token("--executive-font-size", "var(--font-size-xl)", TokenCategory.TYPOGRAPHY))
        elif audience == Audience.TECHNICAL:
            tokens.append(_component_token("--technical-accent", "var(--brand-text-muted)", TokenCategory.COLOR))
            tokens.append(_component_token("--code-font", "Monaco, Consolas, monospace", TokenCategory.TYPOGRAPHY))

        if density == ContentDensity.HIGH:
            tokens.append(_component_token("--dense-spacing", "var(--spacing-2)", TokenCategory.SPACING))
            tokens.append(_component_token("--dense-font-size", "var(--font-size-sm)", TokenCategory.TYPOGRAPHY))
        elif density == ContentDensity.LOW:
            tokens.append(_component_token("--spacious-spacing", "var(--spacing-8)", TokenCategory.SPACING))
            tokens.append(_component_token("--spacious-font-size", "var(--font-size-lg)", TokenCategory.TYPOGRAPHY))

        if slide_type == "hero":
            tokens.append(_component_token(
                "--hero-gradient",
                "linear-gradient(135deg, var(--brand-primary) 0%, var(--brand-secondary) 100%)",
                TokenCategory.COLOR
            ))
        elif slide_type == "evidence":
            tokens.append(_component_token("--evidence-highlight", "var(--brand-accent)", TokenCategory.COLOR))

        return tokens

    def component_overrides(self, slide_type: str, density: ContentDensity) -> List[ComponentStyle]:
        overrides: List[ComponentStyle] = []

        if slide_type == "comparison":
            overrides.append(ComponentStyle(
                component="comparison-grid",
                styles={
                    "display": "grid",
                    "grid-template-columns": "1fr 1fr",
                    "gap": "var(--spacing-6)",
                    "padding": "var(--spacing-4)",
                }
            ))

        if slide_type == "timeline":
            overrides.append(ComponentStyle(
                component="timeline-container",
                styles={
                    "display": "flex",
                    "flex-direction": "row",
                    "align-items": "center",
                    "gap": "var(--spacing-4)",
                },
                responsive={"mobile": {"flex-direction": "column"}}
            ))

        if density == ContentDensity.HIGH:
            overrides.append(ComponentStyle(
                component="content-container",
                styles={
                    "font-size": "var(--dense-font-size)",
                    "line-height": "1.4",
                    "padding": "var(--dense-spacing)",
                }
            ))

        return overrides

    @staticmethod
    def _reasoning(
        slide_type: str,
        audience: Audience,
        density: ContentDensity,
        theme: StyleTheme,
        custom_tokens: Sequence[DesignToken],
        overrides: Sequence[ComponentStyle]
    ) -> str:
        return (
            f"Style optimized for {slide_type or 'generic'} slide targeting {audience.value} audience "
            f"with {density.value} content density. Applied {theme.name} brand theme with "
            f"{len(custom_tokens)} context tokens and {len(overrides)} component overrides."
        )


def _component_token(name: str, value: str, category: TokenCategory) -> DesignToken:
    return DesignToken(name=name, value=value, category=category, scope=TokenScope.COMPONENT)


# Convenience function
def compose_style(slide_type, audience=Audience.GENERAL, density=ContentDensity.MEDIUM,
                  brand_guidelines: Optional[str] = None) -> StyleRecommendation:
    """Compose the style for one slide (convenience function)."""
    return StyleComposer().compose(slide_type, audience, density, brand_guidelines)
