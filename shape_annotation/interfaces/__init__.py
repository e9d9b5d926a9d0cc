"""
Interfaces module - UI adapters for the editing core.

Provides adapters to connect the core editing logic
with different UI frameworks (OpenCV HighGUI, Tkinter, etc).
"""

from .gui_adapter import GUIAnnotationAdapter

__all__ = ['GUIAnnotationAdapter']
