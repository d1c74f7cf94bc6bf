"""
Core Module for deckforge

The four pipeline stages, the slide renderer that merges their outputs,
the orchestrator that runs them and the deck assembly helpers.
"""

from .content_analyzer import ContentAnalyzer, analyze_content, optimize_cognitive_load
from .layout_selector import (
    LayoutSelector,
    LAYOUT_CATALOG,
    get_pattern,
    list_patterns,
    generate_css_framework,
    generate_responsive_css
)
from .asset_curator import (
    AssetCurator,
    curate_assets,
    extract_search_terms,
    get_style_filter,
    get_brand_guidelines,
    validate_brand_compliance,
    check_cultural_appropriateness
)
from .style_composer import (
    StyleComposer,
    compose_style,
    get_brand_theme,
    available_brands,
    validate_accessibility
)
from .slide_renderer import render_slide_markdown, slide_title
from .pipeline_orchestrator import PipelineOrchestrator, generate_presentation
from .deck_assembler import (
    assemble_deck_markdown,
    build_speaker_notes,
    build_analysis_report,
    build_deck_stylesheet
)

__all__ = [
    # Content Analysis
    'ContentAnalyzer',
    'analyze_content',
    'optimize_cognitive_load',

    # Layout Selection
    'LayoutSelector',
    'LAYOUT_CATALOG',
    'get_pattern',
    'list_patterns',
    'generate_css_framework',
    'generate_responsive_css',

    # Asset Curation
    'AssetCurator',
    'curate_assets',
    'extract_search_terms',
    'get_style_filter',
    'get_brand_guidelines',
    'validate_brand_compliance',
    'check_cultural_appropriateness',

    # Style Composition
    'StyleComposer',
    'compose_style',
    'get_brand_theme',
    'available_brands',
    'validate_accessibility',

    # Rendering & Orchestration
    'render_slide_markdown',
    'slide_title',
    'PipelineOrchestrator',
    'generate_presentation',

    # Deck Assembly
    'assemble_deck_markdown',
    'build_speaker_notes',
    'build_analysis_report',
    'build_deck_stylesheet',
]
