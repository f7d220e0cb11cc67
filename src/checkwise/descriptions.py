# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Schema descriptions and their resolution into checkers.

Anything handed to ``as_(...)`` or to a combinator is first normalized by
:func:`describe` into one of a closed set of variants, then resolved by
:func:`resolve`:

=====================  ===========================================  ==============================
Variant                Produced from                                Resolves to
=====================  ===========================================  ==============================
:class:`Composed`      an existing :class:`~checkwise.checker.Checker`  the checker itself
:class:`PrimitiveMarker`  ``str``, ``int``, ``float``, ``bool``,     the registry type (or
                       ``dict``, ``list``, ``tuple``, ``datetime``,  argument-free leaf)
                       ``date``, ``json``, ``callable``,
                       ``Exception``, ``object``, ``typing.Any``
:class:`InstanceOf`    any other class                              ``instanceof(cls)``
:class:`Pattern`       a compiled regular expression                ``regexp(pattern)``
:class:`Structural`    a ``dict`` / ``list`` / ``tuple`` instance    ``object``/``array`` ``with_``
:class:`Literal`       anything else                                ``eq(value)``
=====================  ===========================================  ==============================

Variants may also be passed directly, e.g. ``as_(Literal(str))`` to require
the ``str`` class itself rather than a string.
"""

from __future__ import annotations

import json
import re
from collections.abc import Mapping, Sequence
from datetime import date, datetime
from typing import TYPE_CHECKING, Any

from .checker import Checker
from .dataclasses import FrozenDataclass

if TYPE_CHECKING:
    from .registry import Registry

__all__ = [
    "Composed",
    "InstanceOf",
    "Literal",
    "Pattern",
    "PrimitiveMarker",
    "SchemaDescription",
    "Structural",
    "describe",
    "resolve",
]


@FrozenDataclass()
class Composed:
    """An already built checker."""

    checker: Checker


@FrozenDataclass()
class PrimitiveMarker:
    """A registry type referenced by name (``"string"``, ``"number"``…)."""

    name: str


@FrozenDataclass()
class InstanceOf:
    """Values must be instances of ``cls``."""

    cls: type[object]


@FrozenDataclass()
class Pattern:
    """Strings must contain a match for ``regex``."""

    regex: re.Pattern[str]


@FrozenDataclass(eq=False)
class Structural:
    """A shape template: a mapping of field descriptions or a list of items."""

    template: Mapping[object, object] | Sequence[object]


@FrozenDataclass(eq=False)
class Literal:
    """Values must equal ``value``."""

    value: object


type SchemaDescription = (
    Composed | PrimitiveMarker | InstanceOf | Pattern | Structural | Literal
)

_VARIANTS = (Composed, PrimitiveMarker, InstanceOf, Pattern, Structural, Literal)

# Compared by identity: ``1 == True`` must not turn a literal into a marker.
_MARKERS: tuple[tuple[object, str], ...] = (
    (str, "string"),
    (bool, "boolean"),
    (int, "number"),
    (float, "number"),
    (dict, "object"),
    (list, "array"),
    (tuple, "array"),
    (datetime, "date"),
    (date, "date"),
    (json, "json"),
    (callable, "function"),
    (Exception, "error"),
    (object, "any"),
    (Any, "any"),
)


def describe(description: object) -> SchemaDescription:
    """Normalize a host value into a schema description variant."""

    if isinstance(description, _VARIANTS):
        return description
    if isinstance(description, Checker):
        return Composed(description)
    for marker, name in _MARKERS:
        if description is marker:
            return PrimitiveMarker(name)
    if isinstance(description, re.Pattern):
        return Pattern(description)  # pyright: ignore[reportUnknownArgumentType]
    if isinstance(description, type):
        return InstanceOf(description)
    if isinstance(description, dict | list | tuple):
        return Structural(description)  # pyright: ignore[reportUnknownArgumentType]
    return Literal(description)


def resolve(registry: Registry, *descriptions: object) -> Checker:
    """Resolve descriptions into one checker using ``registry``.

    No description yields the universal checker, one yields its checker and
    several are OR-ed together left to right.
    """

    if not descriptions:
        return registry.universal
    first, *rest = descriptions
    checker = _resolve_one(registry, describe(first))
    if not rest:
        return checker
    return registry.method(checker, "or_")(*rest)


def _resolve_one(registry: Registry, description: SchemaDescription) -> Checker:
    match description:
        case Composed(checker=checker):
            return checker
        case PrimitiveMarker(name=name):
            return registry.primitive(name)
        case InstanceOf(cls=cls):
            return registry.leaf("instanceof", cls)
        case Pattern(regex=regex):
            return registry.leaf("regexp", regex)
        case Structural(template=template):
            base = registry.type("object" if isinstance(template, Mapping) else "array")
            return registry.method(base, "with_")(template)
        case Literal(value=value):
            return registry.leaf("eq", value)
