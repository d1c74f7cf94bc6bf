"""
Layout Selector for deckforge

Maps a slide type plus content density, audience and a has-visuals flag to
one pattern from a fixed layout catalog, and scores the choice.

Rule table (first match wins):
┌──────────────────────┬──────────────────────────────┬────────────────────┬──────┐
│  SLIDE TYPE          │  CONDITION                   │  PATTERN           │ CONF │
├──────────────────────┼──────────────────────────────┼────────────────────┼──────┤
│  hero                │  -                           │  hero-centered     │ 0.95 │
│  problem / solution  │  has visuals                 │  content-split     │ 0.90 │
│  problem / solution  │  no visuals                  │  hero-centered     │ 0.80 │
│  evidence            │  high density                │  information-grid  │ 0.85 │
│  evidence            │  otherwise                   │  content-split     │ 0.80 │
│  comparison          │  -                           │  comparison-table  │ 0.90 │
│  process / workflow  │  -                           │  process-flow      │ 0.88 │
│  anything else       │  high density                │  information-grid  │ 0.70 │
│  anything else       │  otherwise                   │  content-split     │ 0.75 │
└──────────────────────┴──────────────────────────────┴────────────────────┴──────┘
"""

from types import MappingProxyType
from typing import List, Mapping, Optional, Tuple

from deckforge.models.content import Audience, ContentDensity
from deckforge.models.layout import (
    GridSystem,
    LayoutPattern,
    LayoutRecommendation,
    LayoutType,
    VisualHierarchy
)
from deckforge.utils.logger import setup_logger
from deckforge.utils.scoring import clamp

logger = setup_logger(__name__)


LAYOUT_CATALOG: Tuple[LayoutPattern, ...] = (
    LayoutPattern(
        name="hero-centered",
        grid_system=GridSystem.FLEXBOX,
        visual_hierarchy=VisualHierarchy.CENTER_FOCUSED,
        layout_type=LayoutType.HERO,
        responsive_breakpoints=("mobile", "tablet", "desktop"),
        best_for=("opening slides", "title slides", "key messages", "announcements")
    ),
    LayoutPattern(
        name="content-split",
        grid_system=GridSystem.TWELVE_COLUMN,
        visual_hierarchy=VisualHierarchy.Z_PATTERN,
        layout_type=LayoutType.SPLIT,
        responsive_breakpoints=("tablet", "desktop"),
        best_for=("comparisons", "before/after", "problem/solution", "feature descriptions")
    ),
    LayoutPattern(
        name="information-grid",
        grid_system=GridSystem.CSS_GRID,
        visual_hierarchy=VisualHierarchy.F_PATTERN,
        layout_type=LayoutType.GRID,
        responsive_breakpoints=("mobile", "tablet", "desktop"),
        best_for=("data presentation", "multiple points", "dashboard views", "feature grids")
    ),
    LayoutPattern(
        name="process-timeline",
        grid_system=GridSystem.FLEXBOX,
        visual_hierarchy=VisualHierarchy.LEFT_ALIGNED,
        layout_type=LayoutType.TIMELINE,
        responsive_breakpoints=("tablet", "desktop"),
        best_for=("step-by-step processes", "roadmaps", "chronological data", "workflows")
    ),
    LayoutPattern(
        name="comparison-table",
        grid_system=GridSystem.TWELVE_COLUMN,
        visual_hierarchy=VisualHierarchy.F_PATTERN,
        layout_type=LayoutType.COMPARISON,
        responsive_breakpoints=("tablet", "desktop"),
        best_for=("feature comparisons", "competitive analysis", "pros/cons", "options evaluation")
    ),
    LayoutPattern(
        name="process-flow",
        grid_system=GridSystem.FLEXBOX,
        visual_hierarchy=VisualHierarchy.Z_PATTERN,
        layout_type=LayoutType.PROCESS_FLOW,
        responsive_breakpoints=("tablet", "desktop"),
        best_for=("workflows", "user journeys", "system processes", "methodology explanations")
    ),
)

_PATTERNS_BY_NAME: Mapping[str, LayoutPattern] = MappingProxyType(
    {pattern.name: pattern for pattern in LAYOUT_CATALOG}
)

# Container CSS per grid system; anything without an entry gets the plain column
_CSS_TEMPLATES = MappingProxyType({
    GridSystem.TWELVE_COLUMN: """
.slide-container {
  display: grid;
  grid-template-columns: repeat(12, 1fr);
  gap: 1rem;
  padding: 2rem;
}""",
    GridSystem.FLEXBOX: """
.slide-container {
  display: flex;
  flex-direction: column;
  align-items: center;
  justify-content: center;
  padding: 2rem;
  min-height: 100vh;
}""",
    GridSystem.CSS_GRID: """
.slide-container {
  display: grid;
  grid-template-areas:
    "header header header"
    "content content sidebar"
    "footer footer footer";
  gap: 1.5rem;
  padding: 2rem;
}""",
})

_DEFAULT_CSS = """
.slide-container {
  display: flex;
  flex-direction: column;
  padding: 2rem;
}"""


def get_pattern(name: str) -> Optional[LayoutPattern]:
    """Look up a catalog pattern by name."""
    return _PATTERNS_BY_NAME.get(name)


def list_patterns() -> List[LayoutPattern]:
    """All catalog patterns in catalog order."""
    return list(LAYOUT_CATALOG)


def generate_css_framework(pattern: LayoutPattern) -> str:
    """Container CSS for the pattern's grid system."""
    return _CSS_TEMPLATES.get(pattern.grid_system, _DEFAULT_CSS)


def generate_responsive_css(pattern: LayoutPattern) -> str:
    """Mobile-first container CSS with tablet, desktop and large-screen steps."""
    return f"""/* Mobile first */
{generate_css_framework(pattern).strip()}

@media (min-width: 768px) {{
  /* Tablet */
  .slide-container {{
    padding: 3rem;
  }}
}}

@media (min-width: 1024px) {{
  /* Desktop */
  .slide-container {{
    padding: 4rem;
    max-width: 1200px;
    margin: 0 auto;
  }}
}}

@media (min-width: 1440px) {{
  /* Large screens */
  .slide-container {{
    padding: 5rem;
  }}
}}
"""


class LayoutSelector:
    """
    Chooses a layout pattern for a slide.

    Total over every slide type string: anything the rule table does not
    name falls through to the density-based default.
    """

    BASE_ACCESSIBILITY = 0.8
    MOBILE_BONUS = 0.1
    HIERARCHY_BONUS = 0.1
    EXECUTIVE_HERO_BONUS = 0.05

    def recommend(
        self,
        slide_type,
        density=ContentDensity.MEDIUM,
        audience=Audience.GENERAL,
        has_visuals: bool = False
    ) -> LayoutRecommendation:
        """
        Recommend a layout for one slide.

        Args:
            slide_type: SlideType or any slide type string
            density: Presentation content density
            audience: Target audience
            has_visuals: Whether the slide will carry supporting visuals

        Returns:
            LayoutRecommendation with pattern, scores, reason and container CSS
        """
        slide_type = str(getattr(slide_type, "value", slide_type) or "").strip().lower()
        density = ContentDensity.coerce(density)
        audience = Audience.coerce(audience)

        name, confidence, reason = self._select(slide_type, density, has_visuals)
        pattern = _PATTERNS_BY_NAME[name]
        accessibility = self.accessibility_score(pattern, audience)

        logger.debug(
            f"LayoutSelector: type={slide_type or '<empty>'} density={density.value} "
            f"visuals={has_visuals} -> {name} (conf={confidence:.2f}, a11y={accessibility:.2f})"
        )

        return LayoutRecommendation(
            pattern=pattern,
            confidence_score=clamp(confidence),
            accessibility_score=accessibility,
            reason=reason,
            css_framework=generate_css_framework(pattern)
        )

    def _select(
        self,
        slide_type: str,
        density: ContentDensity,
        has_visuals: bool
    ) -> Tuple[str, float, str]:
        if slide_type == "hero":
            return ("hero-centered", 0.95,
                    "Hero layout optimal for opening slides and key messages")

        if slide_type in ("problem", "solution"):
            if has_visuals:
                return ("content-split", 0.90,
                        "Split layout ideal for problem/solution with supporting visuals")
            return ("hero-centered", 0.80,
                    "Centered layout for text-heavy problem/solution slides")

        if slide_type == "evidence":
            if density == ContentDensity.HIGH:
                return ("information-grid", 0.85,
                        "Grid layout handles high-density evidence effectively")
            return ("content-split", 0.80,
                    "Split layout for evidence with supporting visuals")

        if slide_type == "comparison":
            return ("comparison-table", 0.90,
                    "Comparison layout optimized for side-by-side analysis")

        if slide_type in ("process", "workflow"):
            return ("process-flow", 0.88,
                    "Process flow layout ideal for step-by-step content")

        # Default based on content density
        if density == ContentDensity.HIGH:
            return ("information-grid", 0.70, "Grid layout for high-density content")
        return ("content-split", 0.75, "Split layout as versatile default")

    def accessibility_score(self, pattern: LayoutPattern, audience=Audience.GENERAL) -> float:
        """
        Score how accessible a pattern is for the audience.

        0.8 base, +0.1 for a mobile breakpoint, +0.1 for an F/Z reading
        pattern, +0.05 for hero layouts shown to executives.
        """
        score = self.BASE_ACCESSIBILITY

        if pattern.supports_mobile:
            score += self.MOBILE_BONUS

        if pattern.visual_hierarchy in (VisualHierarchy.F_PATTERN, VisualHierarchy.Z_PATTERN):
            score += self.HIERARCHY_BONUS

        if Audience.coerce(audience) == Audience.EXECUTIVE and pattern.layout_type == LayoutType.HERO:
            score += self.EXECUTIVE_HERO_BONUS

        return clamp(score)
