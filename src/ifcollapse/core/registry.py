"""Self-registering class hierarchies and a small event emitter.

A class deriving *directly* from :class:`Registrant` becomes a hub: it gets
its own ``registry`` and every class defined below it is filed there under
its lower-cased ``registrant_name`` (the class name unless overridden).
"""
import collections
import dataclasses
from abc import ABCMeta
from typing import (
    Any,
    Callable,
    ClassVar,
    Generic,
    Hashable,
    Iterable,
    Iterator,
    TypeAlias,
    TypeVar,
    cast,
)

T = TypeVar("T")
_R = TypeVar("_R", bound="Registrant")

Thunk: TypeAlias = Callable[[], T]


class FilterableGenerator(Generic[T]):
    """Lazy view over *source*, keeping items that pass every predicate.

    ``filter`` returns a new view with one more predicate; nothing is
    evaluated until the view is iterated, so registrations made in the
    meantime are seen.
    """

    def __init__(
        self,
        source: Iterable[T],
        predicates: Iterable[Callable[[T], bool]] = (),
    ):
        self._source = source
        self._predicates = tuple(predicates)

    def filter(self, predicate: Callable[[T], bool]) -> "FilterableGenerator[T]":
        return FilterableGenerator(self._source, self._predicates + (predicate,))

    def __iter__(self) -> Iterator[T]:
        return (
            item
            for item in self._source
            if all(keep(item) for keep in self._predicates)
        )

    def __repr__(self):
        return f"<FilterableGenerator {len(self._predicates)} predicate(s) over {self._source!r}>"


class Registry(ABCMeta):
    """Metaclass behind :class:`Registrant`.

    Hubs get fresh registries, so two unrelated hierarchies never see each
    other's classes. Any other class is filed into every hub above it.
    """

    def __init__(cls, name: str, bases: tuple[type, ...], attrs: dict[str, Any]):
        super().__init__(name, bases, attrs)
        if not bases:
            # Registrant itself
            return
        if Registrant in bases:
            cls.registry = {}
            cls.lazy_registry = {}
        for hub in cls.__mro__[1:]:
            if Registrant in hub.__bases__:
                hub.register(cls)


class Registrant(metaclass=Registry):
    """Base of self-registering class hierarchies."""

    registrant_name: ClassVar[str]

    registry: ClassVar[dict[str, type[Any]]] = {}
    lazy_registry: ClassVar[dict[str, Thunk[type[Any]]]] = {}

    @staticmethod
    def keyof(kls: type) -> str:
        return getattr(kls, "registrant_name", kls.__name__)

    @classmethod
    def normalize_key(cls, key: str) -> str:
        return key.lower()

    @classmethod
    def register(cls, alt: type[Any]) -> None:
        """File *alt* under its key, replacing a pending lazy entry."""
        key = cls.normalize_key(cls.keyof(alt))
        cls.lazy_registry.pop(key, None)
        cls.registry[key] = alt

    @classmethod
    def lazy_register(cls, load: Thunk[type[Any]]) -> None:
        """Register *load* under its function name; it runs on first lookup."""
        key = cls.normalize_key(load.__name__)
        if key not in cls.registry:
            cls.lazy_registry[key] = load

    @classmethod
    def get(cls, name: str) -> _R:  # type: ignore
        """Return the class registered as *name*. Raises ``KeyError``."""
        key = cls.normalize_key(name)
        load = cls.lazy_registry.pop(key, None)
        if load is not None:
            cls.registry[key] = load()
        return cast(_R, cls.registry[key])

    @classmethod
    def find(cls, name: str) -> _R | None:  # type: ignore
        """Like :meth:`get`, but ``None`` for an unknown name."""
        try:
            return cls.get(name)
        except KeyError:
            return None

    @classmethod
    def all(cls) -> list[type[Any]]:
        return list(cls.registry.values())

    @classmethod
    def filter(cls, predicate: Callable[[type], bool]) -> FilterableGenerator[type]:
        """Registered classes for which *predicate* holds, e.g.

        ``for kls in LintPass.filter(is_default).filter(is_stable): ...``
        """
        return FilterableGenerator(cls.registry.values(), (predicate,))


E = TypeVar("E", bound=Hashable)


@dataclasses.dataclass
class EventEmitter(Generic[E]):
    """Maps events to handler sets. Handlers run in no particular order."""

    _handlers: collections.defaultdict[E, set[Callable]] = dataclasses.field(
        default_factory=lambda: collections.defaultdict(set), init=False
    )

    def on(self, event: E, handler: Callable | None = None):
        """Subscribe *handler* to *event*; without a handler, act as a decorator."""
        if handler is None:
            return lambda func: self.on(event, func)
        self._handlers[event].add(handler)
        return handler

    def once(self, event: E, handler: Callable) -> None:
        def fire_once(*args, **kwargs):
            self.remove(event, fire_once)
            return handler(*args, **kwargs)

        self.on(event, fire_once)

    def remove(self, event: E, handler: Callable) -> None:
        self._handlers[event].discard(handler)

    def clear(self) -> None:
        self._handlers.clear()

    def emit(self, event: E, *args, **kwargs) -> None:
        for handler in tuple(self._handlers[event]):
            handler(*args, **kwargs)
