"""
Asset Source Clients for deckforge

Each source implements one capability:

    search(terms, style_filter) -> List[AssetMetadata]

Sources are read-only and independent, so AssetCurator queries them
concurrently. A source is allowed to raise; the curator absorbs failures and
timeouts as an empty contribution.

Sources:
- StaticAssetSource: in-memory catalog (local libraries, tests)
- UnsplashAssetSource: photos via the Unsplash search API
- IconifyAssetSource: icons via the Iconify search API
- FreepikAssetSource: illustrations via the Freepik resources API
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, List, Optional, Sequence

import httpx

from config.settings import Settings, get_settings
from deckforge.models.assets import (
    AssetDimensions,
    AssetLicense,
    AssetMetadata,
    AssetType,
    StyleFilter
)
from deckforge.utils.logger import setup_logger

logger = setup_logger(__name__)


class AssetSource(ABC):
    """
    Abstract asset provider.

    Implementations return candidates with a provider-reported
    semantic_score; the curator rescoring happens downstream.
    """

    name: str = "unknown"

    @abstractmethod
    async def search(self, terms: Sequence[str], style_filter: StyleFilter) -> List[AssetMetadata]:
        """
        Search the provider.

        Args:
            terms: Ordered search terms (most relevant first)
            style_filter: Color/orientation/keyword hints

        Returns:
            Candidate assets (may be empty)
        """
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r})"


class StaticAssetSource(AssetSource):
    """
    Serves a fixed list of assets.

    With match_terms=True only assets sharing a tag with the search terms
    are returned; otherwise the whole catalog is returned in order.
    """

    def __init__(self, name: str, assets: Iterable[AssetMetadata], match_terms: bool = False):
        self.name = name
        self._assets = tuple(assets)
        self.match_terms = match_terms

    async def search(self, terms: Sequence[str], style_filter: StyleFilter) -> List[AssetMetadata]:
        if not self.match_terms:
            return list(self._assets)
        wanted = {term.lower() for term in terms}
        return [
            asset for asset in self._assets
            if wanted.intersection(tag.lower() for tag in asset.tags)
        ]


class HttpAssetSource(AssetSource):
    """Shared plumbing for HTTP-backed sources."""

    def __init__(
        self,
        base_url: str,
        timeout: Optional[float] = None,
        per_source_limit: Optional[int] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        settings = get_settings()
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout or settings.ASSET_SOURCE_TIMEOUT
        self.limit = per_source_limit or settings.ASSET_RESULTS_PER_SOURCE
        self._transport = transport

        logger.info(
            f"{self.__class__.__name__} initialized",
            extra={"base_url": self.base_url, "timeout": self.timeout, "limit": self.limit}
        )

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            headers=self._headers(),
            transport=self._transport
        )

    def _headers(self) -> Dict[str, str]:
        return {"Accept": "application/json"}

    async def _get_json(self, path: str, params: Dict[str, Any]) -> Dict[str, Any]:
        async with self._client() as client:
            response = await client.get(path, params=params)
            response.raise_for_status()
            payload = response.json()
        if not isinstance(payload, dict):
            raise ValueError(f"{self.name}: expected a JSON object, got {type(payload).__name__}")
        return payload

    @staticmethod
    def _rank_score(base: float, index: int, floor: float = 0.5) -> float:
        """Provider relevance decays with result rank."""
        return max(floor, round(base - 0.05 * index, 4))


class UnsplashAssetSource(HttpAssetSource):
    """Photo search against https://api.unsplash.com/search/photos."""

    name = "unsplash"

    # Unsplash only accepts its own color vocabulary
    SUPPORTED_COLORS = {
        "black_and_white", "black", "white", "yellow", "orange", "red",
        "purple", "magenta", "green", "teal", "blue"
    }

    def __init__(self, access_key: str, base_url: Optional[str] = None, **kwargs):
        settings = get_settings()
        self.access_key = access_key
        super().__init__(base_url or settings.UNSPLASH_API_URL, **kwargs)

    def _headers(self) -> Dict[str, str]:
        headers = super()._headers()
        headers["Authorization"] = f"Client-ID {self.access_key}"
        headers["Accept-Version"] = "v1"
        return headers

    async def search(self, terms: Sequence[str], style_filter: StyleFilter) -> List[AssetMetadata]:
        if not terms:
            return []

        params: Dict[str, Any] = {
            "query": " ".join(terms),
            "per_page": self.limit,
            "content_filter": "high"
        }
        if style_filter.orientation:
            params["orientation"] = style_filter.orientation
        if style_filter.color in self.SUPPORTED_COLORS:
            params["color"] = style_filter.color

        payload = await self._get_json("/search/photos", params)
        return [
            self._to_asset(result, index, terms)
            for index, result in enumerate(payload.get("results") or [])
            if isinstance(result, dict) and result.get("id")
        ]

    def _to_asset(self, result: Dict[str, Any], index: int, terms: Sequence[str]) -> AssetMetadata:
        urls = result.get("urls") or {}
        tags = [tag.get("title", "") for tag in result.get("tags") or [] if isinstance(tag, dict)]
        alt_text = result.get("alt_description") or result.get("description") or ""
        width, height = result.get("width"), result.get("height")

        return AssetMetadata(
            id=f"unsplash_{result['id']}",
            type=AssetType.IMAGE,
            source=self.name,
            url=urls.get("regular") or urls.get("full") or "",
            thumbnail_url=urls.get("thumb"),
            alt_text=alt_text or f"{' '.join(terms[:3])} photo",
            tags=tuple(tag for tag in tags if tag) or tuple(terms),
            semantic_score=self._rank_score(0.8, index),
            license=AssetLicense.FREE,
            dimensions=AssetDimensions(width=width, height=height) if width and height else None
        )


class IconifyAssetSource(HttpAssetSource):
    """Icon search against https://api.iconify.design/search."""

    name = "iconify"

    MAX_TERMS = 3

    def __init__(self, base_url: Optional[str] = None, **kwargs):
        settings = get_settings()
        super().__init__(base_url or settings.ICONIFY_API_URL, **kwargs)

    async def search(self, terms: Sequence[str], style_filter: StyleFilter) -> List[AssetMetadata]:
        assets: List[AssetMetadata] = []
        # One best icon per leading term
        for term in list(terms)[:self.MAX_TERMS]:
            payload = await self._get_json("/search", {"query": term, "limit": 32})
            icons = [icon for icon in payload.get("icons") or [] if isinstance(icon, str) and ":" in icon]
            if not icons:
                continue
            prefix, icon_name = icons[0].split(":", 1)
            assets.append(AssetMetadata(
                id=f"iconify_{prefix}_{icon_name}",
                type=AssetType.ICON,
                source=self.name,
                url=f"{self.base_url}/{prefix}/{icon_name}.svg",
                alt_text=f"{term} icon",
                tags=(term,),
                semantic_score=self._rank_score(0.9, len(assets)),
                license=AssetLicense.FREE,
                dimensions=AssetDimensions(width=24, height=24)
            ))
        return assets


class FreepikAssetSource(HttpAssetSource):
    """Illustration search against https://api.freepik.com/v1/resources."""

    name = "freepik"

    def __init__(self, api_key: str, base_url: Optional[str] = None, **kwargs):
        settings = get_settings()
        self.api_key = api_key
        super().__init__(base_url or settings.FREEPIK_API_URL, **kwargs)

    def _headers(self) -> Dict[str, str]:
        headers = super()._headers()
        headers["x-freepik-api-key"] = self.api_key
        return headers

    async def search(self, terms: Sequence[str], style_filter: StyleFilter) -> List[AssetMetadata]:
        if not terms:
            return []

        query = " ".join(list(terms) + list(style_filter.keywords[:1]))
        payload = await self._get_json("/v1/resources", {"term": query, "limit": self.limit})
        return [
            self._to_asset(item, index, terms)
            for index, item in enumerate(payload.get("data") or [])
            if isinstance(item, dict) and item.get("id") is not None
        ]

    def _to_asset(self, item: Dict[str, Any], index: int, terms: Sequence[str]) -> AssetMetadata:
        licenses = {str(entry.get("type", "")).lower() for entry in item.get("licenses") or [] if isinstance(entry, dict)}
        if "premium" in licenses:
            license_type = AssetLicense.PREMIUM
        else:
            license_type = AssetLicense.ATTRIBUTION

        image = item.get("image") or {}
        source = image.get("source") or {}
        title = item.get("title") or ""

        return AssetMetadata(
            id=f"freepik_{item['id']}",
            type=AssetType.IMAGE,
            source=self.name,
            url=item.get("url") or source.get("url") or "",
            thumbnail_url=source.get("url"),
            alt_text=title or f"{terms[0]} illustration",
            tags=tuple(terms),
            semantic_score=self._rank_score(0.85, index),
            license=license_type
        )


def build_default_sources(settings: Optional[Settings] = None) -> List[AssetSource]:
    """
    Instantiate every asset source enabled in settings.

    Sources needing credentials are skipped when no key is configured.
    """
    settings = settings or get_settings()
    sources: List[AssetSource] = []

    if settings.has_unsplash:
        sources.append(UnsplashAssetSource(access_key=settings.UNSPLASH_ACCESS_KEY))
    elif settings.UNSPLASH_ENABLED:
        logger.info("Unsplash enabled but UNSPLASH_ACCESS_KEY missing, skipping source")

    if settings.ICONIFY_ENABLED:
        sources.append(IconifyAssetSource())

    if settings.has_freepik:
        sources.append(FreepikAssetSource(api_key=settings.FREEPIK_API_KEY))

    logger.info(f"Asset sources configured: {[source.name for source in sources]}")
    return sources
