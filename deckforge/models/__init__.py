"""
Models Package for deckforge

Contains all Pydantic models exchanged between the pipeline stages.
"""

from .content import (
    Audience,
    PresentationType,
    SlideType,
    NarrativeFlow,
    InformationHierarchy,
    MessagingFramework,
    ContentDensity,
    SlideRecommendation,
    ContentAnalysisResult
)

from .layout import (
    GridSystem,
    VisualHierarchy,
    LayoutType,
    LayoutPattern,
    LayoutRecommendation
)

from .assets import (
    AssetType,
    AssetLicense,
    AssetStyle,
    AssetDimensions,
    AssetMetadata,
    StyleFilter,
    BrandGuidelines,
    AssetQuery,
    AssetRecommendation
)

from .style import (
    TokenCategory,
    TokenScope,
    DesignToken,
    ComponentStyle,
    StyleTheme,
    AccessibilityReport,
    StyleRecommendation,
    BRAND_THEMES,
    DEFAULT_BRAND_ID
)

from .presentation import (
    SlideGenerationRequest,
    GeneratedSlide,
    PresentationMetadata,
    QualityMetrics,
    SlideGenerationResult
)

__all__ = [
    # Content analysis
    'Audience',
    'PresentationType',
    'SlideType',
    'NarrativeFlow',
    'InformationHierarchy',
    'MessagingFramework',
    'ContentDensity',
    'SlideRecommendation',
    'ContentAnalysisResult',

    # Layout
    'GridSystem',
    'VisualHierarchy',
    'LayoutType',
    'LayoutPattern',
    'LayoutRecommendation',

    # Assets
    'AssetType',
    'AssetLicense',
    'AssetStyle',
    'AssetDimensions',
    'AssetMetadata',
    'StyleFilter',
    'BrandGuidelines',
    'AssetQuery',
    'AssetRecommendation',

    # Style
    'TokenCategory',
    'TokenScope',
    'DesignToken',
    'ComponentStyle',
    'StyleTheme',
    'AccessibilityReport',
    'StyleRecommendation',
    'BRAND_THEMES',
    'DEFAULT_BRAND_ID',

    # Presentation
    'SlideGenerationRequest',
    'GeneratedSlide',
    'PresentationMetadata',
    'QualityMetrics',
    'SlideGenerationResult'
]
