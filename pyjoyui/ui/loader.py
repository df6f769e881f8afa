"""
Startup loading for PyJoyUI.

``load_elements`` moves statically declared pages and widgets into the UI
manager. ``BootSequence`` drives a content loader one item per frame,
reports progress, and opens the starting page once everything is loaded.
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Iterable, Iterator, List, Optional, Protocol, Sequence, Union

from .elements import Page, UIElement
from .manager import UIManager
from ..core.exceptions import ConfigurationError, handle_error
from ..core.logging import get_logger


def load_elements(elements: Iterable[UIElement],
                  manager: Optional[UIManager] = None) -> List[UIElement]:
    """
    Register statically declared elements with a manager.

    Elements whose identity is already registered are discarded.

    Args:
        elements: Pages and widgets to register
        manager: Target manager, the installed one if None

    Returns:
        The elements that were added
    """
    if manager is None:
        # Import here to avoid circular imports
        from .api import get_ui_manager
        manager = get_ui_manager("load UI elements")
        if manager is None:
            return []

    return manager.load(elements)


@dataclass
class ContentItem:
    """One piece of loaded content."""
    name: str
    path: Optional[Path] = None
    data: Any = None


class ContentLoader(Protocol):
    """Source of content items loaded at boot."""

    def load(self) -> Iterable[Any]:
        ...


class DirectoryContentLoader:
    """Loads every JSON file found under a set of directories."""

    def __init__(self, paths: Sequence[Union[str, Path]], suffixes: Sequence[str] = (".json",)):
        self.paths = [Path(p) for p in paths]
        self.suffixes = tuple(suffixes)
        self.logger = get_logger("content_loader")

    def _files(self) -> Iterator[Path]:
        for root in self.paths:
            if not root.exists():
                self.logger.warning("Content directory not found", extra={"path": str(root)})
                continue
            for path in sorted(root.rglob("*")):
                if path.is_file() and path.suffix in self.suffixes:
                    yield path

    def load(self) -> List[ContentItem]:
        items = []
        for path in self._files():
            try:
                with open(path, 'r', encoding='utf-8') as f:
                    data = json.load(f)
            except (OSError, json.JSONDecodeError) as e:
                handle_error(ConfigurationError(
                    f"Failed to load content file {path}", cause=e,
                    context={"path": str(path)}
                ))
                continue
            items.append(ContentItem(path.stem, path, data))
        return items


ProgressCallback = Callable[[Any, int, int], None]


@dataclass
class BootSequence:
    """
    Loads content over several frames, then starts the UI.

    Each ``update`` consumes one item and reports ``(item, index, total)`` to
    the progress callbacks. After the last item the completion callbacks run
    and the manager is awakened on the starting page.
    """
    manager: UIManager
    loader: ContentLoader
    starting_page: Optional[str] = None

    _progress_callbacks: List[ProgressCallback] = field(default_factory=list, init=False)
    _completion_callbacks: List[Callable[[], None]] = field(default_factory=list, init=False)
    _items: Optional[List[Any]] = field(default=None, init=False)
    _index: int = field(default=0, init=False)
    _complete: bool = field(default=False, init=False)
    _start_page: Optional[Page] = field(default=None, init=False)

    def __post_init__(self):
        self.logger = get_logger("boot")

    def add_progress_callback(self, callback: ProgressCallback) -> None:
        self._progress_callbacks.append(callback)

    def add_completion_callback(self, callback: Callable[[], None]) -> None:
        self._completion_callbacks.append(callback)

    @property
    def total(self) -> int:
        return len(self._items) if self._items is not None else 0

    @property
    def progress(self) -> float:
        """Fraction of items loaded so far."""
        if self._complete:
            return 1.0
        return self._index / self.total if self.total else 0.0

    @property
    def is_complete(self) -> bool:
        return self._complete

    @property
    def loaded_items(self) -> List[Any]:
        return list(self._items[:self._index]) if self._items is not None else []

    def start(self) -> None:
        """Collect the items to load. Called by the first ``update`` if needed."""
        if self._items is None:
            self._items = list(self.loader.load())
            self.logger.info("Boot started", extra={"items": len(self._items)})

    def update(self, dt: float = 0.0) -> bool:
        """
        Load the next item.

        Returns:
            True once the sequence is complete
        """
        if self._complete:
            return True

        self.start()

        if self._index < self.total:
            item = self._items[self._index]
            for callback in self._progress_callbacks:
                callback(item, self._index, self.total)
            self._index += 1
            return False

        self._finish()
        return True

    def run_to_completion(self) -> Optional[Page]:
        """Load every remaining item at once and start the UI."""
        while not self.update():
            pass
        return self._start_page

    def _finish(self) -> None:
        self._complete = True
        for callback in self._completion_callbacks:
            callback()

        self._start_page = self.manager.awaken(self.starting_page)
        self.logger.info("Boot completed", extra={
            "items": self.total,
            "starting_page": self.starting_page or self.manager.starting_page
        })
