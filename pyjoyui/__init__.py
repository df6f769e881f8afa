"""
PyJoyUI - page navigation and overlay widgets for pygame applications

Keyboard, gamepad and touch aware UI management
"""

__version__ = "0.1.0"
__author__ = "AI Research Team"

from .ui import UIManager
from .input import PresentationAdapter
from .config import Config

__all__ = [
    "UIManager",
    "PresentationAdapter",
    "Config",
]
