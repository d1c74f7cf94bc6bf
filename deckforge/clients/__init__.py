"""
Asset source clients for deckforge.
"""

from .asset_sources import (
    AssetSource,
    StaticAssetSource,
    HttpAssetSource,
    UnsplashAssetSource,
    IconifyAssetSource,
    FreepikAssetSource,
    build_default_sources
)

__all__ = [
    'AssetSource',
    'StaticAssetSource',
    'HttpAssetSource',
    'UnsplashAssetSource',
    'IconifyAssetSource',
    'FreepikAssetSource',
    'build_default_sources',
]
