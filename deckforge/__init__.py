"""
deckforge: content-to-slide recommendation pipeline.

Free-form text plus audience, presentation type, brand and time budget in;
styled, asset-annotated Slidev markdown slides and quality metrics out.
"""

__version__ = "1.0.0"

from .core import PipelineOrchestrator, generate_presentation
from .models import SlideGenerationRequest, SlideGenerationResult

__all__ = [
    '__version__',
    'PipelineOrchestrator',
    'generate_presentation',
    'SlideGenerationRequest',
    'SlideGenerationResult',
]
