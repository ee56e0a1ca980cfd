"""
Utility helpers for the rental application portal.
"""

from .preview_manager import PreviewHandle, PreviewManager

__all__ = [
    'PreviewHandle',
    'PreviewManager'
]
