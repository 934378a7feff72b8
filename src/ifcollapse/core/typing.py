"""
Typing names for package code, in one place.

Import as ``from ifcollapse.core import typing``. Everything comes from the
standard ``typing`` module except ``Self`` and ``override``, which are taken
from typing_extensions on interpreters that predate them.
"""

# isort: skip_file
from __future__ import annotations
import sys

from typing import (
    Any,
    Callable,
    ClassVar,
    Iterable,
    Iterator,
    Mapping,
    Optional,
    Protocol,
    TYPE_CHECKING,
    Union,
    runtime_checkable,
)

if sys.version_info >= (3, 11):
    from typing import Self  # noqa: F401
else:
    from typing_extensions import Self  # noqa: F401

if sys.version_info >= (3, 12):
    from typing import override  # noqa: F401
else:
    from typing_extensions import override  # noqa: F401


__all__ = [
    "Any",
    "Callable",
    "ClassVar",
    "Iterable",
    "Iterator",
    "Mapping",
    "Optional",
    "Protocol",
    "Self",
    "TYPE_CHECKING",
    "Union",
    "override",
    "runtime_checkable",
]
