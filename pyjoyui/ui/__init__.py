"""
User interface management for PyJoyUI.

This module provides:
- Page and widget element model with per-modality views
- Transitions and the per-element transition engine
- Page navigation with back/forward history
- Overlay widgets ordered by priority
- The UIManager context object and its module-level accessor
"""

from .elements import (
    ViewType, ElementKind, UIData, UIView, UIElement, Page, Widget
)

from .transitions import UITransition, FadeTransition

from .transition_engine import Animation, TransitionEngine

from .registry import (
    ElementLocation, LocationTable, SceneInstantiator, FactoryInstantiator, Registry
)

from .navigation import NavigationController

from .overlay import OverlayController

from .manager import UIManager

from .api import (
    install_ui_manager, uninstall_ui_manager, get_ui_manager, has_ui_manager
)

from .loader import (
    load_elements, ContentItem, ContentLoader, DirectoryContentLoader, BootSequence
)

from .triggers import LogicType, LogicTrigger

__all__ = [
    # Element model
    "ViewType",
    "ElementKind",
    "UIData",
    "UIView",
    "UIElement",
    "Page",
    "Widget",

    # Transitions
    "UITransition",
    "FadeTransition",
    "Animation",
    "TransitionEngine",

    # Registries
    "ElementLocation",
    "LocationTable",
    "SceneInstantiator",
    "FactoryInstantiator",
    "Registry",

    # Controllers
    "NavigationController",
    "OverlayController",
    "UIManager",

    # Global access
    "install_ui_manager",
    "uninstall_ui_manager",
    "get_ui_manager",
    "has_ui_manager",

    # Loading
    "load_elements",
    "ContentItem",
    "ContentLoader",
    "DirectoryContentLoader",
    "BootSequence",

    # Triggers
    "LogicType",
    "LogicTrigger",
]
