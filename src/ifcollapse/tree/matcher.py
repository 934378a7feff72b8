"""High-level pattern matcher.

``match_pattern`` tries one pattern against one node.  ``Matcher``
combines schemes (pattern + handler pairs) with a children-first walk of
a tree and collects every handler result.
"""
from __future__ import annotations

import traceback

from ifcollapse.core import typing
from ifcollapse.core import getLogger
from ifcollapse.tree.iteration import walk_exprs
from ifcollapse.tree.match_context import MatchContext, MatchResult
from ifcollapse.tree.patterns.base_pattern import BasePat
from ifcollapse.tree.scheme import Scheme

logger = getLogger("IfCollapse.tree")


def match_pattern(
    pattern: BasePat, item: typing.Any, source_map: typing.Any = None
) -> MatchResult | None:
    """Match *item* against *pattern* with a fresh context.

    Returns the captures on success and ``None`` on a structural mismatch.
    Captures of a failed attempt are discarded with its context.
    """
    mctx = MatchContext(pattern, source_map)
    if not pattern.check(item, mctx):
        return None
    return mctx.result()


class Matcher:
    """High-level API combining schemes + tree walk + context.

    Walks a tree and applies schemes (pattern/handler pairs).  A scheme
    that raises on a node is logged and skipped for that node only.
    """

    def __init__(
        self,
        *schemes: Scheme,
        result_type: type | None = None,
        on_scheme_error: typing.Callable[[Scheme, typing.Any, Exception], None] | None = None,
    ) -> None:
        self.schemes: dict[str, Scheme] = {
            "scheme" + str(i): s for i, s in enumerate(schemes)
        }
        self.result_type = result_type
        self.on_scheme_error = on_scheme_error

    def get_scheme(self, scheme_name: str) -> Scheme | None:
        """Look up a scheme by name."""
        return self.schemes.get(scheme_name)

    def add_scheme(self, name: str, scheme: Scheme) -> None:
        """Add a scheme with the given name."""
        self.schemes[name] = scheme

    def remove_scheme(self, scheme_name: str) -> None:
        """Remove a scheme by name."""
        self.schemes.pop(scheme_name, None)

    def match_tree(self, root: typing.Any, source_map: typing.Any = None) -> list[typing.Any]:
        """Walk the tree under *root* and return every scheme result."""
        schemes = list(self.schemes.values())
        for scheme in schemes:
            scheme.on_tree_iteration_start()

        results: list[typing.Any] = []
        for subitem in walk_exprs(root):
            results.extend(self.check_schemes(subitem, source_map, schemes))

        for scheme in schemes:
            scheme.on_tree_iteration_end()
        return results

    def check_schemes(
        self,
        item: typing.Any,
        source_map: typing.Any,
        schemes: list[Scheme] | None = None,
    ) -> list[typing.Any]:
        """Check item against all schemes."""
        if schemes is None:
            schemes = list(self.schemes.values())
        results: list[typing.Any] = []
        for scheme in schemes:
            results.extend(self.check_scheme(scheme, item, source_map))
        return results

    def check_scheme(
        self, scheme: Scheme, item: typing.Any, source_map: typing.Any
    ) -> list[typing.Any]:
        """Check item against a single scheme with exception handling."""
        try:
            return self._check_scheme(scheme, item, source_map)
        except Exception as e:
            logger.error("Got an exception during scheme checking: %s", e)
            logger.debug(traceback.format_exc())
            if self.on_scheme_error is not None:
                self.on_scheme_error(scheme, item, e)
            return []

    def _check_scheme(
        self, scheme: Scheme, item: typing.Any, source_map: typing.Any
    ) -> list[typing.Any]:
        """Internal: check item against scheme patterns."""
        if not scheme.accepts(item):
            return []

        results: list[typing.Any] = []
        for pat in scheme.patterns:
            mctx = MatchContext(pat, source_map)
            # check that pattern matches tree item
            if not pat.check(item, mctx):
                continue

            # handle user's scheme callback
            result = scheme.on_matched_item(item, mctx)
            if result is None:
                continue

            # validate return type
            if self.result_type is not None and not isinstance(result, self.result_type):
                raise TypeError(
                    f"Handler returned invalid return type, should be {self.result_type.__name__} or None"
                )
            results.append(result)
            if scheme.stype is Scheme.SchemeType.GENERIC:
                break

        return results
