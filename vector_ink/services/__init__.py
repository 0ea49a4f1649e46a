"""Persistence services"""

from .canvas_storage import CanvasStorage

__all__ = ['CanvasStorage']
