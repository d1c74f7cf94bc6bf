"""
Asset Curator for deckforge

Finds, scores and shortlists visuals for one slide.

Flow:
1. Extract up to 10 search terms from the slide context
2. Resolve the preferred style into a StyleFilter
3. Fan out to every asset source concurrently, each under a deadline
4. Rescore candidates against slide type, audience and licensing
5. Keep compliant candidates, top 5 become the recommendation,
   the next 3 best become fallbacks

A source that raises or times out contributes nothing; curation itself
never fails because of a source.
"""

import asyncio
import re
from types import MappingProxyType
from typing import Iterable, List, Mapping, Optional, Sequence, Tuple

from config.settings import Settings, get_settings
from deckforge.clients.asset_sources import AssetSource
from deckforge.models.assets import (
    AssetLicense,
    AssetMetadata,
    AssetQuery,
    AssetRecommendation,
    AssetStyle,
    AssetType,
    BrandGuidelines,
    StyleFilter
)
from deckforge.models.content import Audience
from deckforge.models.style import DEFAULT_BRAND_ID, normalize_brand_id
from deckforge.utils.logger import setup_logger
from deckforge.utils.scoring import clamp, mean

logger = setup_logger(__name__)


MAX_SEARCH_TERMS = 10
MIN_TERM_LENGTH = 4
MAX_SELECTED_ASSETS = 5
MAX_FALLBACK_OPTIONS = 3

STOP_WORDS = frozenset({
    'the', 'and', 'or', 'but', 'in', 'on', 'at', 'to', 'for', 'of', 'with', 'by',
    'this', 'that', 'these', 'those', 'from', 'into', 'about', 'over', 'have',
    'has', 'been', 'were', 'will', 'would', 'should', 'could', 'their', 'there',
    'they', 'them', 'then', 'than', 'what', 'when', 'where', 'which', 'while',
    'your', 'ours', 'also', 'just', 'more', 'most', 'some', 'such', 'very'
})

BUSINESS_TERMS = (
    'business', 'strategy', 'growth', 'innovation', 'technology', 'solution', 'service'
)

_NON_LETTERS = re.compile(r'[^a-z\s]')

STYLE_FILTERS: Mapping[AssetStyle, StyleFilter] = MappingProxyType({
    AssetStyle.PROFESSIONAL: StyleFilter(
        color="blue",
        orientation="landscape",
        keywords=("business", "corporate", "professional", "clean", "minimal")
    ),
    AssetStyle.CASUAL: StyleFilter(
        keywords=("friendly", "approachable", "modern", "colorful")
    ),
    AssetStyle.TECHNICAL: StyleFilter(
        color="black_and_white",
        orientation="landscape",
        keywords=("technical", "engineering", "data", "diagram", "schematic")
    ),
    AssetStyle.CREATIVE: StyleFilter(
        keywords=("creative", "artistic", "innovative", "unique", "bold")
    ),
})

SENSITIVE_TERMS = ('religious', 'political', 'controversial')

# Extra terms checked when the query names a cultural context
CONTEXT_SENSITIVE_TERMS: Mapping[str, Tuple[str, ...]] = MappingProxyType({
    'global': ('alcohol', 'gesture', 'flag'),
    'middle-east': ('alcohol', 'pork'),
    'east-asia': ('number four',),
})

BRAND_GUIDELINES: Mapping[str, BrandGuidelines] = MappingProxyType({
    'corporate': BrandGuidelines(
        name='corporate',
        colors=('blue', 'orange', 'gray', 'white'),
        style='professional'
    ),
    'midnight': BrandGuidelines(
        name='midnight',
        colors=('navy', 'black', 'blue', 'dark'),
        style='technical'
    ),
})


# ============================================================================
# POLICY FUNCTIONS
# ============================================================================

def extract_search_terms(content: str) -> List[str]:
    """
    Turn free text into ordered search terms.

    Business vocabulary found in the text comes first, then the remaining
    content words in text order. Deduplicated, at most 10. Characters other
    than letters and whitespace are dropped rather than split on, so
    "e-commerce" becomes "ecommerce".
    """
    text = _NON_LETTERS.sub('', (content or '').lower())
    words = [
        word for word in text.split()
        if len(word) >= MIN_TERM_LENGTH and word not in STOP_WORDS
    ]

    present = set(words)
    ordered = [term for term in BUSINESS_TERMS if term in present]
    ordered.extend(words)

    terms: List[str] = []
    for word in ordered:
        if word not in terms:
            terms.append(word)
        if len(terms) == MAX_SEARCH_TERMS:
            break
    return terms


def get_style_filter(style) -> StyleFilter:
    """Search hints for a preferred style; unknown styles get the professional filter."""
    try:
        resolved = AssetStyle(str(getattr(style, 'value', style) or '').strip().lower())
    except ValueError:
        resolved = AssetStyle.PROFESSIONAL
    return STYLE_FILTERS[resolved]


def get_brand_guidelines(brand_id: Optional[str], default: Optional[str] = None) -> BrandGuidelines:
    """Resolve a brand identifier, falling back to `default`, then corporate."""
    guidelines = BRAND_GUIDELINES.get(normalize_brand_id(brand_id))
    if guidelines is None:
        fallback_id = normalize_brand_id(default)
        if fallback_id not in BRAND_GUIDELINES:
            fallback_id = DEFAULT_BRAND_ID
        logger.info(f"Unknown brand guidelines '{brand_id}', using '{fallback_id}'")
        guidelines = BRAND_GUIDELINES[fallback_id]
    return guidelines


def validate_brand_compliance(asset: AssetMetadata, guidelines: Optional[BrandGuidelines]) -> bool:
    """
    True if any asset tag matches a guideline color or the guideline style.

    Otherwise an asset is only considered on-brand when it is tagged
    "professional" or "business".
    """
    tags = [tag.lower() for tag in asset.tags]

    if guidelines is not None:
        colors = {color.lower() for color in guidelines.colors}
        if any(tag in colors for tag in tags):
            return True
        if guidelines.style and guidelines.style.lower() in tags:
            return True

    return 'professional' in tags or 'business' in tags


def check_cultural_appropriateness(asset: AssetMetadata, context: Optional[str] = None) -> bool:
    """False if alt text or tags mention a sensitive term."""
    haystack = f"{asset.alt_text} {' '.join(asset.tags)}".lower()

    terms: Tuple[str, ...] = SENSITIVE_TERMS
    if context:
        terms = terms + CONTEXT_SENSITIVE_TERMS.get(normalize_brand_id(context), ())

    return not any(term in haystack for term in terms)


# ============================================================================
# CURATOR
# ============================================================================

class AssetCurator:
    """
    Curates assets for slides from a set of pluggable sources.

    Args:
        sources: Asset sources to query (empty -> no assets, never an error)
        timeout: Per-source deadline in seconds (default ASSET_SOURCE_TIMEOUT)
        settings: Source of the timeout and the default brand (default: get_settings())
    """

    HERO_IMAGE_BOOST = 0.10
    PROCESS_ICON_BOOST = 0.15
    EXECUTIVE_PROFESSIONAL_BOOST = 0.10
    PREMIUM_PENALTY = 0.05

    SCORE_WEIGHT = 0.7
    COMPLIANCE_WEIGHT = 0.3

    def __init__(
        self,
        sources: Optional[Iterable[AssetSource]] = None,
        timeout: Optional[float] = None,
        settings: Optional[Settings] = None
    ):
        settings = settings or get_settings()
        self.sources: Tuple[AssetSource, ...] = tuple(sources or ())
        self.timeout = timeout if timeout is not None else settings.ASSET_SOURCE_TIMEOUT
        self.default_brand = settings.DEFAULT_BRAND_GUIDELINES

    async def curate(self, query: AssetQuery) -> AssetRecommendation:
        """
        Curate assets for one slide.

        Args:
            query: AssetQuery describing slide, audience and preferences

        Returns:
            AssetRecommendation (possibly empty)
        """
        terms = extract_search_terms(query.content_context)
        style_filter = get_style_filter(query.preferred_style)

        candidates = await self._gather_candidates(terms, style_filter)

        guidelines = (
            get_brand_guidelines(query.brand_guidelines, default=self.default_brand)
            if query.brand_guidelines else None
        )
        scored = [self._score(asset, query, guidelines) for asset in candidates]

        # sorted() is stable, so equal scores keep source order
        ranked = sorted(scored, key=lambda asset: asset.semantic_score, reverse=True)
        selected = [asset for asset in ranked if asset.is_compliant][:MAX_SELECTED_ASSETS]

        selected_keys = {asset.key for asset in selected}
        fallbacks = [asset for asset in ranked if asset.key not in selected_keys][:MAX_FALLBACK_OPTIONS]

        confidence = self._confidence(selected)

        logger.debug(
            f"AssetCurator: slide={query.slide_type} terms={terms} candidates={len(candidates)} "
            f"selected={len(selected)} fallbacks={len(fallbacks)} confidence={confidence:.2f}"
        )

        return AssetRecommendation(
            assets=selected,
            reasoning=self._reasoning(selected, fallbacks, query),
            confidence_score=confidence,
            fallback_options=fallbacks
        )

    async def _gather_candidates(self, terms: Sequence[str], style_filter: StyleFilter) -> List[AssetMetadata]:
        if not self.sources:
            return []

        results = await asyncio.gather(
            *(self._search_source(source, terms, style_filter) for source in self.sources)
        )

        candidates: List[AssetMetadata] = []
        seen = set()
        for source_assets in results:
            for asset in source_assets:
                if asset.key in seen:
                    continue
                seen.add(asset.key)
                candidates.append(asset)
        return candidates

    async def _search_source(
        self,
        source: AssetSource,
        terms: Sequence[str],
        style_filter: StyleFilter
    ) -> List[AssetMetadata]:
        try:
            results = list(
                await asyncio.wait_for(source.search(terms, style_filter), timeout=self.timeout) or []
            )
        except asyncio.TimeoutError:
            logger.warning(f"Asset source '{source.name}' timed out after {self.timeout}s, skipping")
            return []
        except Exception as e:
            logger.warning(f"Asset source '{source.name}' failed: {type(e).__name__}: {e}")
            return []

        valid = [asset for asset in results if isinstance(asset, AssetMetadata)]
        if len(valid) != len(results):
            logger.warning(
                f"Asset source '{source.name}' returned {len(results) - len(valid)} "
                f"non-asset results, ignoring them"
            )
        return valid

    def _score(
        self,
        asset: AssetMetadata,
        query: AssetQuery,
        guidelines: Optional[BrandGuidelines]
    ) -> AssetMetadata:
        score = asset.semantic_score
        slide_type = str(query.slide_type or '').strip().lower()

        if slide_type == 'hero' and asset.type == AssetType.IMAGE:
            score += self.HERO_IMAGE_BOOST
        elif slide_type == 'process' and asset.type == AssetType.ICON:
            score += self.PROCESS_ICON_BOOST

        if query.target_audience == Audience.EXECUTIVE and 'professional' in asset.tags:
            score += self.EXECUTIVE_PROFESSIONAL_BOOST

        if asset.license == AssetLicense.PREMIUM and 'premium' not in query.content_context.lower():
            score -= self.PREMIUM_PENALTY

        brand_ok = asset.brand_compliance
        if guidelines is not None:
            brand_ok = brand_ok and validate_brand_compliance(asset, guidelines)

        return asset.model_copy(update={
            'semantic_score': clamp(round(score, 4)),
            'brand_compliance': brand_ok,
            'cultural_appropriateness': (
                asset.cultural_appropriateness
                and check_cultural_appropriateness(asset, query.cultural_context)
            ),
        })

    def _confidence(self, selected: Sequence[AssetMetadata]) -> float:
        if not selected:
            return 0.0
        average = mean([asset.semantic_score for asset in selected])
        compliant = sum(1 for asset in selected if asset.brand_compliance) / len(selected)
        return clamp(round(self.SCORE_WEIGHT * average + self.COMPLIANCE_WEIGHT * compliant, 4))

    @staticmethod
    def _reasoning(
        selected: Sequence[AssetMetadata],
        fallbacks: Sequence[AssetMetadata],
        query: AssetQuery
    ) -> str:
        audience = query.target_audience.value
        if not selected:
            return (
                f"No compliant assets found for {query.slide_type} slide targeting "
                f"{audience} audience; {len(fallbacks)} fallback options available."
            )

        types = _unique(asset.type.value for asset in selected)
        sources = _unique(asset.source for asset in selected)
        return (
            f"Selected {len(selected)} assets ({', '.join(types)}) from {', '.join(sources)} "
            f"optimized for {query.slide_type} slide targeting {audience} audience."
        )


def _unique(values: Iterable[str]) -> List[str]:
    seen: List[str] = []
    for value in values:
        if value not in seen:
            seen.append(value)
    return seen


# Convenience function
async def curate_assets(query: AssetQuery, sources: Optional[Iterable[AssetSource]] = None) -> AssetRecommendation:
    """
    Curate assets for one slide (convenience function).

    Args:
        query: AssetQuery
        sources: Asset sources to query

    Returns:
        AssetRecommendation
    """
    curator = AssetCurator(sources=sources)
    return await curator.curate(query)
