"""
Test Suite for the PipelineOrchestrator

Tests:
1. Example request produces the five-slide deck
2. Metadata and quality metrics aggregation
3. Optimization suggestions (quality, visuals, size, time budget, typography)
4. Request validation
5. Idempotence and serialisation
"""

import json

import pytest
from pydantic import ValidationError

from config.settings import Settings
from deckforge.clients.asset_sources import AssetSource, StaticAssetSource
from deckforge.core.asset_curator import AssetCurator
from deckforge.core.content_analyzer import ContentAnalyzer
from deckforge.core.pipeline_orchestrator import PipelineOrchestrator, generate_presentation
from deckforge.core.style_composer import StyleComposer
from deckforge.models.content import Audience, SlideRecommendation, SlideType
from deckforge.models.presentation import SlideGenerationRequest
from deckforge.models.style import DesignToken, StyleTheme, TokenCategory
from deckforge.utils.scoring import mean

EXAMPLE_CONTENT = (
    "Our current process has a major problem with onboarding delays. "
    "The solution is automated scheduling, resulting in a 40% benefit to throughput."
)


class RecordingSource(AssetSource):
    """Returns nothing, remembers the style filters it was asked for."""
    name = "recording"

    def __init__(self):
        self.filters = []

    async def search(self, terms, style_filter):
        self.filters.append(style_filter)
        return []


class SevenMinuteAnalyzer(ContentAnalyzer):
    """Fixed 420-second deck regardless of content."""

    def recommend_slides(self, content):
        return [
            SlideRecommendation(slide_type=SlideType.HERO, priority=1, estimated_time=30,
                                content_points=["Title"]),
            SlideRecommendation(slide_type=SlideType.SOLUTION, priority=3, estimated_time=300,
                                content_points=["Deep dive"]),
            SlideRecommendation(slide_type=SlideType.ACTION, priority=5, estimated_time=90,
                                content_points=["Next steps"]),
        ]


class ManySlidesAnalyzer(ContentAnalyzer):
    def recommend_slides(self, content):
        return [
            SlideRecommendation(slide_type=SlideType.SUMMARY, priority=i, estimated_time=10,
                                content_points=[f"Point {i}"])
            for i in range(1, 5)
        ]


def _orchestrator(curator, **kwargs):
    return PipelineOrchestrator(asset_curator=curator, **kwargs)


# ============================================================================
# GENERATION
# ============================================================================

async def test_example_request_generates_five_slides(static_curator):
    """Test 1: hero, problem, solution, evidence, action."""
    result = await _orchestrator(static_curator).generate({
        "content": EXAMPLE_CONTENT,
        "audience": "general",
        "presentation_type": "business",
    })

    assert [slide.id for slide in result.slides] == [f"slide_{i}" for i in range(1, 6)]
    assert [slide.type for slide in result.slides] == ["hero", "problem", "solution", "evidence", "action"]
    assert [slide.title for slide in result.slides] == [
        "Strategic Overview",
        "Current Challenges",
        "Our Solution",
        "Proven Results & Impact",
        "Next Steps Forward",
    ]
    assert result.slides[0].content == "Title, Subtitle, Key value proposition"
    assert result.slides[1].layout.pattern.name == "content-split"
    assert all(slide.markdown.startswith("---\nlayout: default\n") for slide in result.slides)


async def test_slides_follow_priority_order(static_curator):
    class ShuffledAnalyzer(ContentAnalyzer):
        def recommend_slides(self, content):
            return list(reversed(super().recommend_slides(content)))

    result = await _orchestrator(static_curator, content_analyzer=ShuffledAnalyzer()).generate(
        {"content": EXAMPLE_CONTENT}
    )

    assert [slide.type for slide in result.slides] == ["hero", "problem", "solution", "evidence", "action"]


async def test_metadata_and_metrics(static_curator):
    """Test 2: aggregation over slides."""
    result = await _orchestrator(static_curator).generate({"content": EXAMPLE_CONTENT})
    metadata = result.presentation_metadata
    metrics = result.quality_metrics

    assert metadata.total_slides == 5
    assert metadata.estimated_duration == 30 + 60 + 90 + 60 + 45
    assert metadata.complexity_score == 0
    assert metadata.accessibility_score == pytest.approx(mean(s.layout.accessibility_score for s in result.slides))
    assert metadata.brand_compliance == pytest.approx(1.0)

    # hero, evidence and action template points are 50 characters or shorter
    assert metrics.content_quality == pytest.approx((0.7 + 0.9 + 0.9 + 0.7 + 0.7) / 5)
    assert metrics.visual_appeal == pytest.approx(0.9)
    assert metrics.overall_score == pytest.approx(mean([
        metrics.content_quality,
        metrics.visual_appeal,
        metrics.accessibility,
        metrics.brand_alignment,
    ]))
    for score in (metrics.content_quality, metrics.visual_appeal, metrics.accessibility,
                  metrics.brand_alignment, metrics.overall_score):
        assert 0.0 <= score <= 1.0


async def test_no_assets_lowers_visual_appeal():
    """Test 3: quality rules fire independently."""
    result = await _orchestrator(AssetCurator(sources=[])).generate({"content": EXAMPLE_CONTENT})

    assert result.quality_metrics.visual_appeal == pytest.approx(0.6)
    assert all(slide.assets.assets == [] for slide in result.slides)
    assert "Add more visual elements like charts, diagrams, or high-quality images" in result.optimization_suggestions
    assert "Consider expanding content depth or adding more supporting details" in result.optimization_suggestions


async def test_time_constraint_overage_is_reported(static_curator):
    orchestrator = _orchestrator(static_curator, content_analyzer=SevenMinuteAnalyzer())

    result = await orchestrator.generate({"content": EXAMPLE_CONTENT, "time_constraint": 5})

    assert result.presentation_metadata.estimated_duration == 420
    assert "Presentation duration (7min) exceeds the 5min time constraint by 2min" in result.optimization_suggestions


async def test_time_constraint_met_adds_no_overage(static_curator):
    result = await _orchestrator(static_curator).generate({"content": EXAMPLE_CONTENT, "time_constraint": 10})

    assert not any("time constraint" in suggestion for suggestion in result.optimization_suggestions)


async def test_slide_count_limit_is_configurable(static_curator):
    orchestrator = _orchestrator(
        static_curator,
        content_analyzer=ManySlidesAnalyzer(),
        settings=Settings(MAX_RECOMMENDED_SLIDES=3)
    )
    result = await orchestrator.generate({"content": "anything"})

    assert result.presentation_metadata.total_slides == 4
    assert any("over 3 slides" in suggestion for suggestion in result.optimization_suggestions)


async def test_theme_typography_issues_become_suggestions(static_curator):
    tiny = StyleTheme(name="tiny", tokens=[
        DesignToken(name="--font-size-base", value="10px", category=TokenCategory.TYPOGRAPHY)
    ])

    class TinyComposer(StyleComposer):
        def compose(self, slide_type, audience=Audience.GENERAL, density="medium", brand_guidelines=None):
            recommendation = super().compose(slide_type, audience, density, brand_guidelines)
            return recommendation.model_copy(update={
                "theme": tiny,
                "accessibility": recommendation.accessibility.model_copy(
                    update={"issues": ["Font sizes below recommended minimum"]}
                ),
            })

    result = await _orchestrator(static_curator, style_composer=TinyComposer()).generate(
        {"content": EXAMPLE_CONTENT}
    )

    matching = [s for s in result.optimization_suggestions if s.startswith("Review theme typography")]
    assert matching == ["Review theme typography: Font sizes below recommended minimum"]


async def test_presentation_type_drives_asset_style():
    source = RecordingSource()
    await _orchestrator(AssetCurator(sources=[source])).generate({
        "content": EXAMPLE_CONTENT,
        "presentation_type": "technical",
    })

    assert source.filters
    assert all(f.color == "black_and_white" for f in source.filters)


async def test_brand_guidelines_select_theme(static_curator):
    result = await _orchestrator(static_curator).generate({
        "content": EXAMPLE_CONTENT,
        "brand_guidelines": "midnight",
    })

    assert {slide.style.theme.name for slide in result.slides} == {"midnight"}


async def test_unknown_audience_defaults_to_general(static_curator):
    result = await _orchestrator(static_curator).generate({"content": EXAMPLE_CONTENT, "audience": "board"})
    assert "general audience" in result.slides[0].assets.reasoning


# ============================================================================
# VALIDATION
# ============================================================================

@pytest.mark.parametrize("payload", [
    {"audience": "executive"},
    {"content": 123},
    {"content": "text", "time_constraint": 0},
    {"content": "text", "unexpected": True},
])
async def test_malformed_mapping_raises_validation_error(static_curator, payload):
    """Test 4: caller bugs surface as errors."""
    with pytest.raises(ValidationError):
        await _orchestrator(static_curator).generate(payload)


async def test_non_mapping_request_raises_type_error(static_curator):
    with pytest.raises(TypeError):
        await _orchestrator(static_curator).generate("just a string")


async def test_accepts_request_model(static_curator):
    request = SlideGenerationRequest(content=EXAMPLE_CONTENT, audience=Audience.EXECUTIVE)
    result = await _orchestrator(static_curator).generate(request)

    assert result.presentation_metadata.total_slides == 5


# ============================================================================
# IDEMPOTENCE & SERIALISATION
# ============================================================================

async def test_generation_is_idempotent(static_curator):
    """Test 5: identical input, identical output."""
    orchestrator = _orchestrator(static_curator)
    request = {"content": EXAMPLE_CONTENT, "audience": "executive", "time_constraint": 3}

    first = await orchestrator.generate(request)
    second = await orchestrator.generate(request)

    assert [s.markdown for s in first.slides] == [s.markdown for s in second.slides]
    assert first.quality_metrics == second.quality_metrics
    assert first.optimization_suggestions == second.optimization_suggestions


async def test_result_is_json_serialisable(static_curator):
    result = await _orchestrator(static_curator).generate({"content": EXAMPLE_CONTENT})
    payload = json.loads(json.dumps(result.model_dump(mode="json")))

    assert payload["presentation_metadata"]["total_slides"] == 5
    assert payload["slides"][0]["layout"]["pattern"]["grid_system"] == "flexbox"


async def test_generate_presentation_convenience(asset_factory):
    sources = [StaticAssetSource("local", [asset_factory("photo")])]
    result = await generate_presentation({"content": EXAMPLE_CONTENT}, sources=sources)

    assert result.slides[0].assets.primary_asset.id == "photo"


async def test_orchestrator_settings_drive_default_brand(static_curator):
    orchestrator = _orchestrator(static_curator, settings=Settings(DEFAULT_BRAND_GUIDELINES="midnight"))

    named_unknown = await orchestrator.generate({"content": EXAMPLE_CONTENT, "brand_guidelines": "acme-co"})
    unnamed = await orchestrator.generate({"content": EXAMPLE_CONTENT})

    assert {slide.style.theme.name for slide in named_unknown.slides} == {"midnight"}
    assert {slide.style.theme.name for slide in unnamed.slides} == {"midnight"}


async def test_slides_keep_content_points(static_curator):
    result = await _orchestrator(static_curator).generate({"content": EXAMPLE_CONTENT})

    assert result.slides[0].content_points == ["Title", "Subtitle", "Key value proposition"]
    assert result.slides[0].content == ", ".join(result.slides[0].content_points)
