"""Shared utilities for deckforge."""

from .logger import setup_logger
from .scoring import clamp, mean

__all__ = ['setup_logger', 'clamp', 'mean']
