"""
Test Suite for the AssetCurator and asset sources

Tests:
1. Search term extraction and style filters
2. Brand and cultural policy functions
3. Scoring, selection and fallbacks
4. Source failures and timeouts are absorbed
5. HTTP sources against httpx.MockTransport
"""

import asyncio

import httpx
import pytest

from config.settings import Settings
from deckforge.clients.asset_sources import (
    AssetSource,
    FreepikAssetSource,
    IconifyAssetSource,
    StaticAssetSource,
    UnsplashAssetSource,
    build_default_sources
)
from deckforge.core.asset_curator import (
    BRAND_GUIDELINES,
    AssetCurator,
    check_cultural_appropriateness,
    curate_assets,
    extract_search_terms,
    get_brand_guidelines,
    get_style_filter,
    validate_brand_compliance
)
from deckforge.models.assets import (
    AssetLicense,
    AssetQuery,
    AssetStyle,
    AssetType,
    StyleFilter
)
from deckforge.models.content import Audience


class FailingSource(AssetSource):
    name = "failing"

    async def search(self, terms, style_filter):
        raise RuntimeError("provider exploded")


class SlowSource(AssetSource):
    name = "slow"

    async def search(self, terms, style_filter):
        await asyncio.sleep(5)
        return []


def _query(**overrides) -> AssetQuery:
    fields = {
        "content_context": "Quarterly growth strategy review",
        "slide_type": "evidence",
        "target_audience": Audience.GENERAL,
    }
    fields.update(overrides)
    return AssetQuery(**fields)


# ============================================================================
# SEARCH TERMS & STYLE FILTERS
# ============================================================================

def test_business_vocabulary_comes_first():
    """Test 1: business terms first, then content words in order."""
    terms = extract_search_terms("Our business strategy drives growth through innovation and technology")

    assert terms == [
        "business", "strategy", "growth", "innovation", "technology", "drives", "through"
    ]


def test_search_terms_strip_non_letters_and_short_words():
    assert extract_search_terms("AI-driven 2024 growth!!") == ["growth", "aidriven"]
    assert extract_search_terms("") == []
    assert extract_search_terms("the and for with") == []


def test_punctuation_is_removed_not_split_on():
    terms = extract_search_terms("Our e-commerce platform and the company's roadmap")

    assert terms == ["ecommerce", "platform", "companys", "roadmap"]
    assert "commerce" not in terms


def test_search_terms_capped_at_ten_and_deduplicated():
    content = " ".join(f"word{letter}" for letter in "abcdefghijklmno") + " worda wordb"
    terms = extract_search_terms(content)

    assert len(terms) == 10
    assert len(set(terms)) == 10


def test_style_filters():
    technical = get_style_filter(AssetStyle.TECHNICAL)
    assert technical.color == "black_and_white"
    assert technical.orientation == "landscape"
    assert "schematic" in technical.keywords

    casual = get_style_filter("casual")
    assert casual.color is None
    assert casual.orientation is None

    assert get_style_filter("vaporwave") == get_style_filter(AssetStyle.PROFESSIONAL)
    assert get_style_filter(None).color == "blue"


# ============================================================================
# POLICY FUNCTIONS
# ============================================================================

def test_brand_compliance_matches_colors_and_style(asset_factory):
    """Test 2: guideline colors/style, else professional/business tag."""
    corporate = BRAND_GUIDELINES["corporate"]

    assert validate_brand_compliance(asset_factory("a", tags=("Blue", "sky")), corporate)
    assert validate_brand_compliance(asset_factory("b", tags=("professional",)), corporate)
    assert validate_brand_compliance(asset_factory("c", tags=("business",)), None)
    assert not validate_brand_compliance(asset_factory("d", tags=("sunset", "beach")), corporate)
    assert not validate_brand_compliance(asset_factory("e", tags=()), None)


def test_unknown_brand_guidelines_fall_back_to_default():
    assert get_brand_guidelines("acme").name == "corporate"
    assert get_brand_guidelines("Midnight").name == "midnight"


def test_unknown_brand_guidelines_use_configured_default():
    assert get_brand_guidelines("acme", default="midnight").name == "midnight"
    assert get_brand_guidelines("acme", default="also-unknown").name == "corporate"


def test_cultural_check_rejects_sensitive_terms(asset_factory):
    assert not check_cultural_appropriateness(asset_factory("a", tags=("political",)))
    assert not check_cultural_appropriateness(asset_factory("b", alt_text="A Religious ceremony"))
    assert not check_cultural_appropriateness(asset_factory("c", tags=("Controversial-topic",)))
    assert check_cultural_appropriateness(asset_factory("d", tags=("office", "team")))


def test_cultural_context_adds_terms(asset_factory):
    asset = asset_factory("toast", tags=("alcohol", "celebration"))

    assert check_cultural_appropriateness(asset)
    assert not check_cultural_appropriateness(asset, "global")
    assert check_cultural_appropriateness(asset, "unknown-region")


# ============================================================================
# CURATION
# ============================================================================

async def test_political_candidate_never_selected(asset_factory):
    """Test 3: culturally inappropriate candidates only appear as fallbacks."""
    source = StaticAssetSource("local", [
        asset_factory("rally", semantic_score=0.95, tags=("professional", "political")),
        asset_factory("office", semantic_score=0.6),
    ])
    result = await AssetCurator(sources=[source]).curate(_query())

    assert [asset.id for asset in result.assets] == ["office"]
    assert [asset.id for asset in result.fallback_options] == ["rally"]
    assert not result.fallback_options[0].cultural_appropriateness


async def test_reported_flags_are_respected(asset_factory):
    source = StaticAssetSource("local", [
        asset_factory("off-brand", brand_compliance=False),
        asset_factory("ok"),
    ])
    result = await AssetCurator(sources=[source]).curate(_query())

    assert [asset.id for asset in result.assets] == ["ok"]


@pytest.mark.parametrize("slide_type, asset_type, audience, license, content, expected", [
    ("hero", AssetType.IMAGE, Audience.GENERAL, AssetLicense.FREE, "", 0.8),
    ("hero", AssetType.ICON, Audience.GENERAL, AssetLicense.FREE, "", 0.7),
    ("process", AssetType.ICON, Audience.GENERAL, AssetLicense.FREE, "", 0.85),
    ("evidence", AssetType.IMAGE, Audience.EXECUTIVE, AssetLicense.FREE, "", 0.8),
    ("evidence", AssetType.IMAGE, Audience.GENERAL, AssetLicense.PREMIUM, "", 0.65),
    ("evidence", AssetType.IMAGE, Audience.GENERAL, AssetLicense.PREMIUM, "Our PREMIUM tier", 0.7),
])
async def test_contextual_scoring(asset_factory, slide_type, asset_type, audience, license, content, expected):
    source = StaticAssetSource("local", [
        asset_factory("x", type=asset_type, semantic_score=0.7, license=license)
    ])
    result = await AssetCurator(sources=[source]).curate(_query(
        slide_type=slide_type,
        target_audience=audience,
        content_context=content
    ))

    assert result.assets[0].semantic_score == pytest.approx(expected)


async def test_scores_are_clamped(asset_factory):
    source = StaticAssetSource("local", [asset_factory("x", semantic_score=0.95)])
    result = await AssetCurator(sources=[source]).curate(_query(
        slide_type="hero",
        target_audience=Audience.EXECUTIVE
    ))

    assert result.assets[0].semantic_score == 1.0


async def test_top_five_and_disjoint_fallbacks(asset_factory):
    source = StaticAssetSource("local", [
        asset_factory(f"asset-{i}", semantic_score=0.5 + i * 0.04) for i in range(10)
    ])
    result = await AssetCurator(sources=[source]).curate(_query())

    assert len(result.assets) == 5
    assert len(result.fallback_options) == 3
    assert [asset.id for asset in result.assets] == [f"asset-{i}" for i in (9, 8, 7, 6, 5)]
    assert [asset.id for asset in result.fallback_options] == ["asset-4", "asset-3", "asset-2"]

    selected = {asset.key for asset in result.assets}
    assert not selected.intersection(asset.key for asset in result.fallback_options)
    assert all(asset.is_compliant for asset in result.assets)


async def test_duplicate_candidates_are_merged(asset_factory):
    source = StaticAssetSource("local", [asset_factory("same"), asset_factory("same")])
    result = await AssetCurator(sources=[source]).curate(_query())

    assert len(result.assets) == 1
    assert result.fallback_options == []


async def test_confidence_score(asset_factory):
    source = StaticAssetSource("local", [
        asset_factory("a", semantic_score=0.8),
        asset_factory("b", semantic_score=0.6),
    ])
    result = await AssetCurator(sources=[source]).curate(_query())

    # 0.7 * mean(0.8, 0.6) + 0.3 * 1.0
    assert result.confidence_score == pytest.approx(0.79)


async def test_brand_guidelines_revalidate_compliance(asset_factory):
    source = StaticAssetSource("local", [asset_factory("beach", tags=("sunset",))])

    without = await AssetCurator(sources=[source]).curate(_query())
    with_brand = await AssetCurator(sources=[source]).curate(_query(brand_guidelines="corporate"))

    assert [asset.id for asset in without.assets] == ["beach"]
    assert with_brand.assets == []
    assert with_brand.confidence_score == 0.0
    assert not with_brand.fallback_options[0].brand_compliance


async def test_unknown_brand_revalidates_against_configured_default(asset_factory):
    source = StaticAssetSource("local", [asset_factory("schematic", tags=("technical",))])
    query = _query(brand_guidelines="acme-co")

    default_corporate = await AssetCurator(sources=[source]).curate(query)
    default_midnight = await AssetCurator(
        sources=[source],
        settings=Settings(DEFAULT_BRAND_GUIDELINES="midnight")
    ).curate(query)

    assert default_corporate.assets == []
    assert [asset.id for asset in default_midnight.assets] == ["schematic"]


async def test_reasoning_names_types_sources_slide_and_audience(static_curator):
    result = await static_curator.curate(_query(slide_type="hero", target_audience=Audience.EXECUTIVE))

    assert result.reasoning.startswith("Selected 3 assets (image, chart, icon) from local, icons")
    assert "hero slide" in result.reasoning
    assert "executive audience" in result.reasoning


async def test_failing_and_slow_sources_are_absorbed(asset_factory):
    """Test 4: a failure or timeout contributes zero assets."""
    good = StaticAssetSource("local", [asset_factory("ok")])
    curator = AssetCurator(sources=[FailingSource(), SlowSource(), good], timeout=0.05)

    result = await curator.curate(_query())

    assert [asset.id for asset in result.assets] == ["ok"]


async def test_non_asset_results_are_dropped(asset_factory):
    class SloppySource(AssetSource):
        name = "sloppy"

        async def search(self, terms, style_filter):
            return [{"id": "raw-dict"}, None, asset_factory("real", source="sloppy")]

    class ScalarSource(AssetSource):
        name = "scalar"

        async def search(self, terms, style_filter):
            return 42

    result = await AssetCurator(sources=[SloppySource(), ScalarSource()]).curate(_query())

    assert [asset.id for asset in result.assets] == ["real"]


async def test_no_sources_yields_empty_recommendation():
    result = await AssetCurator(sources=[]).curate(_query())

    assert result.assets == []
    assert result.fallback_options == []
    assert result.confidence_score == 0.0
    assert result.reasoning.startswith("No compliant assets found")
    assert result.primary_asset is None


async def test_static_source_term_matching(asset_factory):
    source = StaticAssetSource("local", [
        asset_factory("chart", tags=("growth", "business")),
        asset_factory("cat", tags=("animals",)),
    ], match_terms=True)

    assets = await source.search(["growth"], StyleFilter())
    assert [asset.id for asset in assets] == ["chart"]


async def test_curate_assets_convenience(static_sources):
    result = await curate_assets(_query(), static_sources)
    assert len(result.assets) == 3


# ============================================================================
# HTTP SOURCES
# ============================================================================

async def test_unsplash_source_maps_results():
    """Test 5: request shape and result mapping via MockTransport."""
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["path"] = request.url.path
        seen["params"] = dict(request.url.params)
        seen["auth"] = request.headers.get("Authorization")
        return httpx.Response(200, json={"results": [
            {
                "id": "abc",
                "urls": {"regular": "https://images.test/abc.jpg", "thumb": "https://images.test/abc_t.jpg"},
                "alt_description": "team at a whiteboard",
                "tags": [{"title": "business"}, {"title": "office"}],
                "width": 4000,
                "height": 3000,
            },
            {"id": "def", "urls": {"full": "https://images.test/def.jpg"}},
        ]})

    source = UnsplashAssetSource(
        access_key="test-key",
        base_url="https://unsplash.test",
        transport=httpx.MockTransport(handler)
    )
    assets = await source.search(["growth", "strategy"], get_style_filter("professional"))

    assert seen["path"] == "/search/photos"
    assert seen["auth"] == "Client-ID test-key"
    assert seen["params"]["query"] == "growth strategy"
    assert seen["params"]["orientation"] == "landscape"
    assert seen["params"]["color"] == "blue"

    assert [asset.id for asset in assets] == ["unsplash_abc", "unsplash_def"]
    first, second = assets
    assert first.source == "unsplash"
    assert first.type == AssetType.IMAGE
    assert first.url == "https://images.test/abc.jpg"
    assert first.thumbnail_url == "https://images.test/abc_t.jpg"
    assert first.tags == ("business", "office")
    assert first.dimensions.width == 4000
    assert first.semantic_score == pytest.approx(0.8)
    assert second.semantic_score == pytest.approx(0.75)
    assert second.alt_text == "growth strategy photo"
    assert second.dimensions is None


async def test_unsplash_http_error_is_absorbed_by_curator():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, json={"errors": ["boom"]})

    source = UnsplashAssetSource(
        access_key="test-key",
        base_url="https://unsplash.test",
        transport=httpx.MockTransport(handler)
    )

    with pytest.raises(httpx.HTTPStatusError):
        await source.search(["growth"], StyleFilter())

    result = await AssetCurator(sources=[source]).curate(_query())
    assert result.assets == []


async def test_iconify_source_builds_svg_urls():
    def handler(request: httpx.Request) -> httpx.Response:
        term = request.url.params["query"]
        if term == "growth":
            return httpx.Response(200, json={"icons": ["mdi:chart-line", "mdi:trending-up"]})
        return httpx.Response(200, json={"icons": []})

    source = IconifyAssetSource(base_url="https://icons.test", transport=httpx.MockTransport(handler))
    assets = await source.search(["growth", "strategy", "review", "ignored"], StyleFilter())

    assert len(assets) == 1
    icon = assets[0]
    assert icon.id == "iconify_mdi_chart-line"
    assert icon.type == AssetType.ICON
    assert icon.url == "https://icons.test/mdi/chart-line.svg"
    assert icon.semantic_score == pytest.approx(0.9)
    assert icon.dimensions.width == 24


async def test_freepik_source_license_mapping():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["key"] = request.headers.get("x-freepik-api-key")
        seen["term"] = request.url.params["term"]
        return httpx.Response(200, json={"data": [
            {"id": 1, "title": "Growth chart", "url": "https://freepik.test/1",
             "licenses": [{"type": "premium"}]},
            {"id": 2, "title": "", "url": "https://freepik.test/2",
             "licenses": [{"type": "freemium"}]},
        ]})

    source = FreepikAssetSource(
        api_key="fp-key",
        base_url="https://freepik.test",
        transport=httpx.MockTransport(handler)
    )
    assets = await source.search(["growth"], get_style_filter("creative"))

    assert seen["key"] == "fp-key"
    assert seen["term"] == "growth creative"
    assert [asset.license for asset in assets] == [AssetLicense.PREMIUM, AssetLicense.ATTRIBUTION]
    assert assets[1].alt_text == "growth illustration"


def test_build_default_sources_respects_settings():
    settings = Settings(
        UNSPLASH_ENABLED=True,
        UNSPLASH_ACCESS_KEY="key",
        ICONIFY_ENABLED=False,
        FREEPIK_ENABLED=True,
        FREEPIK_API_KEY=None
    )
    sources = build_default_sources(settings)

    assert [source.name for source in sources] == ["unsplash"]
