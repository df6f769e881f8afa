"""
Identity to instance resolution for pages and widgets.

Each element kind has its own Registry. An element is either registered
directly (preloaded at startup) or instantiated lazily the first time its
identity is requested, using a static identity -> location table and a scene
instantiator.
"""

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Iterator, List, Mapping, Optional, Protocol

from .elements import ElementKind, UIElement, UIData
from ..core.exceptions import ErrorHandler, ElementNotFoundError, InstantiationError, get_error_handler
from ..core.logging import get_logger


@dataclass(frozen=True)
class ElementLocation:
    """Where an element is declared, and which data record it owns."""
    identity: str
    location: str
    linked_data: Optional[str] = None


class LocationTable:
    """Static identity -> location lookup, built once at startup."""

    def __init__(self, entries: Optional[Iterable[ElementLocation]] = None):
        self._entries: Dict[str, ElementLocation] = {}
        for entry in entries or ():
            self.add(entry)

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, str]) -> "LocationTable":
        """Build a table from a plain ``{identity: location}`` mapping."""
        return cls(ElementLocation(identity, location) for identity, location in mapping.items())

    def add(self, entry: ElementLocation) -> None:
        self._entries[entry.identity] = entry

    def get(self, identity: str) -> Optional[ElementLocation]:
        return self._entries.get(identity)

    def data_owner(self, data_key: str) -> Optional[str]:
        """Identity of the element declared as owning the given data record."""
        for entry in self._entries.values():
            if entry.linked_data == data_key:
                return entry.identity
        return None

    def __contains__(self, identity: object) -> bool:
        return identity in self._entries

    def __len__(self) -> int:
        return len(self._entries)


class SceneInstantiator(Protocol):
    """Creates live elements from declared locations."""

    def instantiate(self, location: str, kind: ElementKind) -> Optional[UIElement]:
        """Return a new element, or None if nothing is declared at ``location``."""
        ...


class FactoryInstantiator:
    """Scene instantiator backed by a table of ``location -> factory``."""

    def __init__(self, factories: Optional[Mapping[str, Callable[[], UIElement]]] = None):
        self._factories: Dict[str, Callable[[], UIElement]] = dict(factories or {})

    def register(self, location: str, factory: Callable[[], UIElement]) -> None:
        self._factories[location] = factory

    def instantiate(self, location: str, kind: ElementKind) -> Optional[UIElement]:
        factory = self._factories.get(location)
        if factory is None:
            return None
        return factory()


class Registry:
    """
    Live instances of one element kind, keyed by identity.

    At most one instance exists per identity; registering a second instance
    under a known identity discards it without logging.
    """

    def __init__(self,
                 kind: ElementKind,
                 locations: Optional[LocationTable] = None,
                 instantiator: Optional[SceneInstantiator] = None,
                 error_handler: Optional[ErrorHandler] = None):
        """
        Args:
            kind: Element kind held by this registry
            locations: Identity -> location lookup used for lazy instantiation
            instantiator: Creates elements from locations
            error_handler: Receives not-found and instantiation errors
        """
        self.kind = kind
        self.locations = locations or LocationTable()
        self.instantiator = instantiator
        self.error_handler = error_handler or get_error_handler()
        self.logger = get_logger(f"{kind.value}_registry")

        self._instances: Dict[str, UIElement] = {}
        self._listeners: List[Callable[[UIElement], None]] = []

    def add_listener(self, listener: Callable[[UIElement], None]) -> None:
        """Register a callback run for every newly registered instance."""
        self._listeners.append(listener)

    def contains(self, identity: str) -> bool:
        return identity in self._instances

    def register(self, instance: Optional[UIElement]) -> bool:
        """
        Register an instance under its identity.

        Returns:
            True if the instance was added, False if it was discarded
        """
        if instance is None:
            return False

        if instance.kind != self.kind:
            self.error_handler.handle_error(InstantiationError(
                instance.identity, type(instance).__name__,
                context={"expected_kind": self.kind.value, "kind": instance.kind.value}
            ))
            return False

        if instance.identity in self._instances:
            return False

        self._instances[instance.identity] = instance
        self.logger.debug("Element registered", extra={
            "identity": instance.identity,
            "type": type(instance).__name__
        })

        for listener in self._listeners:
            listener(instance)
        return True

    def get(self, identity: Optional[str]) -> Optional[UIElement]:
        """
        Resolve an identity, instantiating the element on first request.

        Returns:
            The live instance, or None if the identity cannot be resolved
        """
        if identity is None:
            return None

        instance = self._instances.get(identity)
        if instance is not None:
            return instance

        return self._instantiate(identity)

    def _instantiate(self, identity: str) -> Optional[UIElement]:
        entry = self.locations.get(identity)
        if entry is None or self.instantiator is None:
            self.error_handler.handle_error(ElementNotFoundError(identity, self.kind.value))
            return None

        try:
            instance = self.instantiator.instantiate(entry.location, self.kind)
        except Exception as e:
            self.error_handler.handle_error(InstantiationError(identity, entry.location, cause=e))
            return None

        if instance is None:
            self.error_handler.handle_error(ElementNotFoundError(
                identity, self.kind.value, context={"location": entry.location}
            ))
            return None

        if instance.identity != identity:
            self.error_handler.handle_error(InstantiationError(
                identity, entry.location, context={"instantiated_identity": instance.identity}
            ))
            return None

        self.logger.debug("Element instantiated", extra={
            "identity": identity,
            "location": entry.location
        })
        if not self.register(instance):
            return None
        return instance

    def find_data(self, data_key: str) -> Optional[UIData]:
        """
        Resolve a data record by key.

        The owning element is taken from the location table if it declares
        one (instantiating it if needed); otherwise the registered instances
        are searched.
        """
        if not data_key:
            return None

        owner = self.locations.data_owner(data_key)
        if owner is not None:
            element = self.get(owner)
            return element.data if element is not None else None

        for element in self._instances.values():
            if element.data.KEY == data_key:
                return element.data
        return None

    def identities(self) -> List[str]:
        return list(self._instances)

    def __contains__(self, identity: object) -> bool:
        return identity in self._instances

    def __iter__(self) -> Iterator[UIElement]:
        return iter(list(self._instances.values()))

    def __len__(self) -> int:
        return len(self._instances)
