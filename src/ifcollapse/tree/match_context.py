"""Match context for tree pattern matching.

Stores named captures during pattern matching. When a pattern with a
``bind_name`` matches, the matched node is stored under that key for
later retrieval.  Alternation takes a :meth:`MatchContext.snapshot`
before each alternative and restores it when the alternative fails, so
a failed branch never leaves partial captures behind.
"""
from __future__ import annotations

from ifcollapse.core import typing
from ifcollapse.core import getLogger

if typing.TYPE_CHECKING:
    from ifcollapse.tree.patterns.base_pattern import BasePat

logger = getLogger("IfCollapse.tree")


class MatchResult(typing.Mapping[str, typing.Any]):
    """Read-only view of the captures of one successful match.

    Captures are reachable both as items and as attributes::

        result["check"] is result.check
    """

    __slots__ = ("_captures",)

    def __init__(self, captures: dict[str, typing.Any]) -> None:
        self._captures = dict(captures)

    def __getitem__(self, name: str) -> typing.Any:
        return self._captures[name]

    def __iter__(self) -> typing.Iterator[str]:
        return iter(self._captures)

    def __len__(self) -> int:
        return len(self._captures)

    def __getattr__(self, name: str) -> typing.Any:
        if name.startswith("__") or name == "_captures":
            raise AttributeError(name)
        try:
            return self._captures[name]
        except KeyError:
            raise AttributeError(f"no capture named {name!r}") from None

    def __repr__(self) -> str:
        return f"MatchResult({', '.join(sorted(self._captures))})"


class MatchContext:
    """Dict-like storage for named captures during pattern matching."""

    def __init__(self, pattern: "BasePat", source_map: typing.Any = None) -> None:
        self.pattern = pattern
        self.source_map = source_map
        self.binded_items: dict[str, typing.Any] = {}

    def get_item(self, name: str) -> typing.Any | None:
        """Return the item bound to *name*, or ``None``."""
        return self.binded_items.get(name, None)

    def bind_item(self, name: str, item: typing.Any) -> bool:
        """Bind *item* to *name*.

        A name binds exactly one subtree: binding it again only succeeds
        for the very same node.
        """
        current_item = self.get_item(name)
        if current_item is None:
            self.binded_items[name] = item
            return True
        return current_item is item

    def has_item(self, name: str) -> bool:
        """Return ``True`` if *name* is bound."""
        return self.binded_items.get(name, None) is not None

    def snapshot(self) -> dict[str, typing.Any]:
        """Return a copy of the current captures."""
        return dict(self.binded_items)

    def restore(self, snapshot: dict[str, typing.Any]) -> None:
        """Drop every capture made since *snapshot* was taken."""
        self.binded_items = dict(snapshot)

    def result(self) -> MatchResult:
        return MatchResult(self.binded_items)
