"""
Deck Assembler for deckforge

Turns a SlideGenerationResult into the text artifacts an external
renderer and reporting tools consume:

- assemble_deck_markdown(): deck front matter + slides joined by `---`
- build_speaker_notes(): per-slide notes with the stage reasoning
- build_analysis_report(): JSON-serialisable summary of the run
- build_deck_stylesheet(): deck-wide CSS

Nothing here touches the filesystem.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from deckforge.core.layout_selector import generate_responsive_css
from deckforge.models.presentation import SlideGenerationResult
from deckforge.utils.logger import setup_logger

logger = setup_logger(__name__)

SLIDE_SEPARATOR = "\n\n---\n\n"

ANALYSIS_METHODOLOGY = "four-stage pipeline"

PIPELINE_STAGES = {
    "1_content_analysis": "Keyword heuristics over the text: density, key messages, slide plan",
    "2_layout_selection": "Rule table over slide type, density, audience and visuals",
    "3_asset_curation": "Concurrent source search, contextual scoring, compliance filtering",
    "4_style_composition": "Brand tokens, context tokens and component overrides synthesized to CSS",
}

_DECK_ENHANCEMENTS = """/* Deck enhancements */
.slidev-layout {
  background: var(--brand-background);
  font-family: var(--font-primary);
}

.slide-enter-active,
.slide-leave-active {
  transition: all 0.3s ease;
}

.slide-enter-from {
  opacity: 0;
  transform: translateX(30px);
}

.slide-leave-to {
  opacity: 0;
  transform: translateX(-30px);
}

/* Print styles */
@media print {
  .slide {
    break-inside: avoid;
    page-break-inside: avoid;
  }
}
"""


def assemble_deck_markdown(title: str, result: SlideGenerationResult, theme: Optional[str] = None) -> str:
    """
    Build the full deck document.

    Args:
        title: Deck title for the front matter
        result: Pipeline result
        theme: Renderer theme name (default: the first slide's brand theme)

    Returns:
        Markdown with deck front matter followed by every slide
    """
    if theme is None:
        theme = result.slides[0].style.theme.name if result.slides else "default"

    front_matter = (
        "---\n"
        f"theme: {theme}\n"
        "background: false\n"
        "class: text-center\n"
        "highlighter: shiki\n"
        "lineNumbers: false\n"
        "info: |\n"
        f"  ## {title}\n"
        "\n"
        f"  {result.presentation_metadata.total_slides} slides, "
        f"about {round(result.presentation_metadata.estimated_duration / 60)} minutes\n"
        "drawings:\n"
        "  persist: false\n"
        "transition: slide-left\n"
        f"title: {title}\n"
        "mdc: true\n"
        "---\n"
        "\n"
    )

    logger.debug(f"Assembled deck '{title}': {len(result.slides)} slides, theme={theme}")
    return front_matter + SLIDE_SEPARATOR.join(slide.markdown for slide in result.slides)


def build_speaker_notes(result: SlideGenerationResult) -> str:
    """Markdown speaker notes: overview, then one section per slide."""
    metadata = result.presentation_metadata
    notes = (
        "# Speaker Notes\n\n"
        "## Presentation Overview\n\n"
        f"- **Total Slides:** {metadata.total_slides}\n"
        f"- **Estimated Duration:** {round(metadata.estimated_duration / 60)} minutes\n"
        f"- **Quality Score:** {round(result.quality_metrics.overall_score * 100)}%\n\n"
        "---\n\n"
    )

    for index, slide in enumerate(result.slides, start=1):
        key_points = "\n".join(f"- {point}" for point in slide.content_points)
        notes += f"## Slide {index}: {slide.title}\n\n"
        notes += f"**Type:** {slide.type}\n"
        notes += f"**Estimated Time:** {slide.estimated_time} seconds\n\n"
        notes += f"**Key Points:**\n{key_points}\n\n"
        notes += f"**Layout Strategy:** {slide.layout.reason}\n\n"
        notes += f"**Asset Strategy:** {slide.assets.reasoning}\n\n"
        notes += f"**Style Strategy:** {slide.style.reasoning}\n\n"
        notes += "---\n\n"

    return notes


def build_analysis_report(
    result: SlideGenerationResult,
    generated_at: Optional[datetime] = None
) -> Dict[str, Any]:
    """
    JSON-serialisable report of a pipeline run.

    Args:
        result: Pipeline result
        generated_at: Report timestamp (default: now, UTC)

    Returns:
        Dict ready for json.dumps
    """
    generated_at = generated_at or datetime.now(timezone.utc)

    return {
        "generation_timestamp": generated_at.isoformat(),
        "methodology": ANALYSIS_METHODOLOGY,
        "stages": dict(PIPELINE_STAGES),
        "presentation_metadata": result.presentation_metadata.model_dump(mode="json"),
        "quality_metrics": result.quality_metrics.model_dump(mode="json"),
        "optimization_suggestions": list(result.optimization_suggestions),
        "slides_analysis": [
            {
                "id": slide.id,
                "type": slide.type,
                "title": slide.title,
                "layout": slide.layout.pattern.name,
                "layout_confidence": slide.layout.confidence_score,
                "asset_confidence": slide.assets.confidence_score,
                "asset_count": len(slide.assets.assets),
                "accessibility_score": slide.layout.accessibility_score,
                "theme": slide.style.theme.name,
            }
            for slide in result.slides
        ],
    }


def build_deck_stylesheet(result: SlideGenerationResult) -> str:
    """First slide's CSS, its layout's responsive CSS, transitions and print rules."""
    if not result.slides:
        logger.warning("Building deck stylesheet for an empty result, theme CSS omitted")
        return _DECK_ENHANCEMENTS

    first = result.slides[0]
    return (
        f"{first.style.css_framework.strip()}\n\n"
        f"/* Layout: {first.layout.pattern.name} */\n"
        f"{generate_responsive_css(first.layout.pattern).strip()}\n\n"
        f"{_DECK_ENHANCEMENTS}"
    )
