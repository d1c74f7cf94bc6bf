"""
Pipeline Orchestrator for deckforge

Runs the four-stage pipeline for a SlideGenerationRequest:

    1. ContentAnalyzer   - once per request
    2. LayoutSelector    - per recommended slide
    3. AssetCurator      - per recommended slide (sources fanned out)
    4. StyleComposer     - per recommended slide

and merges the stage outputs into GeneratedSlide records, presentation
metadata, quality metrics and optimization suggestions.

Slides are produced sequentially in priority order; slide ids are
positional (slide_1, slide_2, ...).

Usage:
    orchestrator = PipelineOrchestrator()
    result = await orchestrator.generate({"content": text, "audience": "executive"})
"""

from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from config.settings import Settings, get_settings
from deckforge.clients.asset_sources import AssetSource, build_default_sources
from deckforge.core.asset_curator import AssetCurator
from deckforge.core.content_analyzer import ContentAnalyzer
from deckforge.core.layout_selector import LayoutSelector
from deckforge.core.slide_renderer import render_slide_markdown, slide_title
from deckforge.core.style_composer import StyleComposer
from deckforge.models.assets import AssetQuery, AssetStyle
from deckforge.models.content import ContentAnalysisResult, PresentationType
from deckforge.models.presentation import (
    GeneratedSlide,
    PresentationMetadata,
    QualityMetrics,
    SlideGenerationRequest,
    SlideGenerationResult
)
from deckforge.utils.logger import setup_logger
from deckforge.utils.scoring import clamp, mean

logger = setup_logger(__name__)


# Asset style requested for each presentation type
PRESENTATION_STYLE_MAP: Dict[PresentationType, AssetStyle] = {
    PresentationType.BUSINESS: AssetStyle.PROFESSIONAL,
    PresentationType.TECHNICAL: AssetStyle.TECHNICAL,
    PresentationType.CREATIVE: AssetStyle.CREATIVE,
    PresentationType.EDUCATIONAL: AssetStyle.CASUAL,
}


class PipelineOrchestrator:
    """
    Composes the pipeline stages into one presentation.

    Stages are injectable; defaults are built from the orchestrator's
    settings. With no asset_curator given, the curator queries every source
    enabled in settings.
    """

    CONTENT_LENGTH_THRESHOLD = 50
    RICH_CONTENT_SCORE = 0.9
    THIN_CONTENT_SCORE = 0.7
    WITH_ASSETS_SCORE = 0.9
    WITHOUT_ASSETS_SCORE = 0.6

    CONTENT_QUALITY_TARGET = 0.8
    VISUAL_APPEAL_TARGET = 0.8
    ACCESSIBILITY_TARGET = 0.9

    def __init__(
        self,
        content_analyzer: Optional[ContentAnalyzer] = None,
        layout_selector: Optional[LayoutSelector] = None,
        asset_curator: Optional[AssetCurator] = None,
        style_composer: Optional[StyleComposer] = None,
        settings: Optional[Settings] = None
    ):
        self.settings = settings or get_settings()
        self.content_analyzer = content_analyzer or ContentAnalyzer()
        self.layout_selector = layout_selector or LayoutSelector()
        self.asset_curator = asset_curator or AssetCurator(
            sources=build_default_sources(self.settings),
            settings=self.settings
        )
        self.style_composer = style_composer or StyleComposer(settings=self.settings)

        logger.info(
            f"PipelineOrchestrator initialized with {len(self.asset_curator.sources)} asset sources"
        )

    # =========================================================================
    # MAIN GENERATION METHOD
    # =========================================================================

    async def generate(
        self,
        request: Union[SlideGenerationRequest, Mapping[str, Any]]
    ) -> SlideGenerationResult:
        """
        Generate a presentation.

        Args:
            request: SlideGenerationRequest or a mapping with its fields

        Returns:
            SlideGenerationResult

        Raises:
            pydantic.ValidationError: mapping does not describe a valid request
            TypeError: request is neither a request model nor a mapping
        """
        request = self._coerce_request(request)

        logger.info(
            f"Generating presentation: audience={request.audience.value} "
            f"type={request.presentation_type.value} brand={request.brand_guidelines or 'default'} "
            f"chars={len(request.content)}"
        )
        if request.accessibility_requirements:
            logger.info(f"Accessibility requirements (advisory): {request.accessibility_requirements}")

        analysis = self.content_analyzer.analyze(request.content, request.audience)
        preferred_style = PRESENTATION_STYLE_MAP.get(request.presentation_type, AssetStyle.PROFESSIONAL)

        recommendations = sorted(analysis.slide_recommendations, key=lambda rec: rec.priority)

        slides: List[GeneratedSlide] = []
        for recommendation in recommendations:
            slide_type = recommendation.slide_type.value

            layout = self.layout_selector.recommend(
                slide_type,
                analysis.content_density,
                request.audience,
                has_visuals=True
            )

            assets = await self.asset_curator.curate(AssetQuery(
                content_context=request.content,
                slide_type=slide_type,
                target_audience=request.audience,
                brand_guidelines=request.brand_guidelines,
                preferred_style=preferred_style
            ))

            style = self.style_composer.compose(
                slide_type,
                request.audience,
                analysis.content_density,
                request.brand_guidelines
            )

            markdown = render_slide_markdown(
                recommendation,
                layout,
                assets,
                style,
                max_points=self.settings.MAX_CONTENT_POINTS
            )

            slides.append(GeneratedSlide(
                id=f"slide_{len(slides) + 1}",
                type=slide_type,
                title=slide_title(slide_type),
                content=", ".join(recommendation.content_points),
                content_points=list(recommendation.content_points),
                layout=layout,
                assets=assets,
                style=style,
                markdown=markdown,
                estimated_time=recommendation.estimated_time
            ))

            logger.debug(
                f"Slide {slides[-1].id}: {slide_type} layout={layout.pattern.name} "
                f"assets={len(assets.assets)} theme={style.theme.name}"
            )

        metadata = self.calculate_metadata(slides, analysis)
        metrics = self.calculate_quality_metrics(slides)
        suggestions = self.generate_suggestions(slides, metrics, request)

        logger.info(
            f"Presentation generated: {metadata.total_slides} slides, "
            f"{metadata.estimated_duration}s, overall={metrics.overall_score:.2f}, "
            f"{len(suggestions)} suggestions"
        )

        return SlideGenerationResult(
            slides=slides,
            presentation_metadata=metadata,
            quality_metrics=metrics,
            optimization_suggestions=suggestions
        )

    @staticmethod
    def _coerce_request(request) -> SlideGenerationRequest:
        if isinstance(request, SlideGenerationRequest):
            return request
        if isinstance(request, Mapping):
            return SlideGenerationRequest.model_validate(dict(request))
        raise TypeError(
            f"request must be a SlideGenerationRequest or a mapping, got {type(request).__name__}"
        )

    # =========================================================================
    # AGGREGATION
    # =========================================================================

    def calculate_metadata(
        self,
        slides: List[GeneratedSlide],
        analysis: ContentAnalysisResult
    ) -> PresentationMetadata:
        return PresentationMetadata(
            total_slides=len(slides),
            estimated_duration=sum(slide.estimated_time for slide in slides),
            complexity_score=analysis.cognitive_load_score,
            accessibility_score=clamp(mean(slide.layout.accessibility_score for slide in slides)),
            brand_compliance=clamp(mean(slide.style.theme.brand_alignment for slide in slides))
        )

    def calculate_quality_metrics(self, slides: List[GeneratedSlide]) -> QualityMetrics:
        """
        Per-slide averages of content depth, visuals, accessibility and brand.

        overall_score is the unweighted mean of the four.
        """
        content_quality = clamp(mean(
            self.RICH_CONTENT_SCORE if len(slide.content) > self.CONTENT_LENGTH_THRESHOLD
            else self.THIN_CONTENT_SCORE
            for slide in slides
        ))
        visual_appeal = clamp(mean(
            self.WITH_ASSETS_SCORE if slide.assets.assets else self.WITHOUT_ASSETS_SCORE
            for slide in slides
        ))
        accessibility = clamp(mean(slide.layout.accessibility_score for slide in slides))
        brand_alignment = clamp(mean(slide.style.theme.brand_alignment for slide in slides))

        return QualityMetrics(
            content_quality=content_quality,
            visual_appeal=visual_appeal,
            accessibility=accessibility,
            brand_alignment=brand_alignment,
            overall_score=clamp(mean([content_quality, visual_appeal, accessibility, brand_alignment]))
        )

    def generate_suggestions(
        self,
        slides: List[GeneratedSlide],
        metrics: QualityMetrics,
        request: SlideGenerationRequest
    ) -> List[str]:
        """Independent rule checks; every one that fires adds a suggestion."""
        suggestions: List[str] = []

        if metrics.content_quality < self.CONTENT_QUALITY_TARGET:
            suggestions.append("Consider expanding content depth or adding more supporting details")

        if metrics.visual_appeal < self.VISUAL_APPEAL_TARGET:
            suggestions.append("Add more visual elements like charts, diagrams, or high-quality images")

        if metrics.accessibility < self.ACCESSIBILITY_TARGET:
            suggestions.append("Improve accessibility with better color contrast and alt text")

        max_slides = self.settings.MAX_RECOMMENDED_SLIDES
        if len(slides) > max_slides:
            suggestions.append(
                f"Consider condensing content - presentations over {max_slides} slides "
                f"may lose audience attention"
            )

        total_seconds = sum(slide.estimated_time for slide in slides)
        if request.time_constraint is not None and total_seconds > request.time_constraint * 60:
            overage = total_seconds - request.time_constraint * 60
            suggestions.append(
                f"Presentation duration ({round(total_seconds / 60)}min) exceeds the "
                f"{request.time_constraint:g}min time constraint by {_format_minutes(overage)}"
            )

        style_issues: List[str] = []
        for slide in slides:
            for issue in slide.style.accessibility.issues:
                if issue not in style_issues:
                    style_issues.append(issue)
        for issue in style_issues:
            suggestions.append(f"Review theme typography: {issue}")

        return suggestions


def _format_minutes(seconds: float) -> str:
    """120 -> '2min', 30 -> '0.5min'."""
    return f"{round(seconds / 60, 1):g}min"


# Convenience function
async def generate_presentation(
    request: Union[SlideGenerationRequest, Mapping[str, Any]],
    sources: Optional[Iterable[AssetSource]] = None
) -> SlideGenerationResult:
    """
    Generate a presentation (convenience function).

    Args:
        request: SlideGenerationRequest or mapping
        sources: Asset sources to use (default: sources enabled in settings)

    Returns:
        SlideGenerationResult
    """
    curator = AssetCurator(sources=sources) if sources is not None else None
    orchestrator = PipelineOrchestrator(asset_curator=curator)
    return await orchestrator.generate(request)
