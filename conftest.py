"""
Shared fixtures for the deckforge test suite.

HTTP asset sources are disabled before any deckforge import so that no test
reaches the network; tests inject deterministic static sources instead.
"""

import os

os.environ["UNSPLASH_ENABLED"] = "false"
os.environ["ICONIFY_ENABLED"] = "false"
os.environ["FREEPIK_ENABLED"] = "false"
os.environ.pop("LOGFIRE_TOKEN", None)

import pytest

from deckforge.clients.asset_sources import StaticAssetSource
from deckforge.core.asset_curator import AssetCurator
from deckforge.models.assets import AssetLicense, AssetMetadata, AssetType


@pytest.fixture
def asset_factory():
    """Build AssetMetadata with sensible, compliant defaults."""

    def _make(
        asset_id: str,
        type: AssetType = AssetType.IMAGE,
        source: str = "local",
        tags=("professional", "business"),
        semantic_score: float = 0.7,
        license: AssetLicense = AssetLicense.FREE,
        alt_text: str = "",
        **kwargs
    ) -> AssetMetadata:
        return AssetMetadata(
            id=asset_id,
            type=type,
            source=source,
            url=f"https://assets.example.com/{asset_id}.png",
            alt_text=alt_text or f"{asset_id} visual",
            tags=tuple(tags),
            semantic_score=semantic_score,
            license=license,
            **kwargs
        )

    return _make


@pytest.fixture
def static_sources(asset_factory):
    """Two deterministic sources: photos and icons."""
    photos = StaticAssetSource("local", [
        asset_factory("team-meeting", semantic_score=0.8, tags=("professional", "business", "blue")),
        asset_factory("growth-chart", type=AssetType.CHART, semantic_score=0.75),
    ])
    icons = StaticAssetSource("icons", [
        asset_factory("gear", type=AssetType.ICON, source="icons", semantic_score=0.6),
    ])
    return [photos, icons]


@pytest.fixture
def static_curator(static_sources):
    return AssetCurator(sources=static_sources, timeout=1.0)
