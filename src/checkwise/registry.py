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

"""Registry of named types, leaves and combinators.

A :class:`Registry` is immutable. Extending it returns a new registry, so a
checker keeps resolving names against the tables it was built with::

    strict = default_registry().extend(
        leaves={"even": lambda registry: static_check(
            "even", lambda value: value % 2 == 0, lambda value: value, "Odd"
        )},
    )
    strict.type("number").even().matches(4)
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from functools import cache, partial
from types import MappingProxyType
from typing import Final, override

from .checker import Checker, Operations, hydrate
from .combinators import COMBINATORS, LEAVES, Combinator, Leaf
from .descriptions import resolve as resolve_descriptions
from .errors import UnknownCheckerError
from .logging import get_logger
from .primitives import TYPES
from .status import Status

__all__ = ["RESERVED_NAMES", "Registry", "TypeFactory", "default_registry"]

logger = get_logger(__name__)

type TypeFactory = Callable[[Registry], Checker]
"""``(registry) -> Checker`` for argument-free types."""

RESERVED_NAMES: Final[frozenset[str]] = frozenset(
    {
        "raw",
        "name",
        "weight",
        "label",
        "registry",
        "matches",
        "coerce",
        "validate",
        "update",
        "display_name",
        "resolved_registry",
        "extend",
        "any",
    }
)
"""Names that would shadow checker or dispatcher attributes."""


def _always(value: object, status: Status) -> bool:
    return True


def _identity(value: object, status: Status) -> object:
    return value


class Registry:
    """Immutable tables of named checker factories.

    Attributes:
        types: Argument-free types, instantiated once per registry.
        leaves: Parameterized checks, ``leaf(registry, *args)``.
        combinators: Checker transformers, ``combinator(left, *args)``.
        universal: Checker accepting every value unchanged.
    """

    def __init__(
        self,
        *,
        types: Mapping[str, TypeFactory] | None = None,
        leaves: Mapping[str, Leaf] | None = None,
        combinators: Mapping[str, Combinator] | None = None,
    ) -> None:
        tables = {
            "types": dict(TYPES if types is None else types),
            "leaves": dict(LEAVES if leaves is None else leaves),
            "combinators": dict(COMBINATORS if combinators is None else combinators),
        }
        _check_names(tables)
        self.types: Mapping[str, TypeFactory] = MappingProxyType(tables["types"])
        self.leaves: Mapping[str, Leaf] = MappingProxyType(tables["leaves"])
        self.combinators: Mapping[str, Combinator] = MappingProxyType(
            tables["combinators"]
        )
        self.universal = hydrate(
            Operations(matches=_always, coerce=_identity, validate=_identity),
            weight=0,
            registry=self,
            label="any",
        )
        self._checkers: Mapping[str, Checker] = MappingProxyType(
            {name: factory(self) for name, factory in self.types.items()}
        )

    @override
    def __repr__(self) -> str:
        return (
            f"Registry(types={sorted(self.types)}, leaves={sorted(self.leaves)}, "
            f"combinators={sorted(self.combinators)})"
        )

    def __contains__(self, name: object) -> bool:
        return name in self.types or name in self.leaves or name in self.combinators

    def type(self, name: str) -> Checker:
        """Return the checker registered as type ``name``."""

        try:
            return self._checkers[name]
        except KeyError:
            raise UnknownCheckerError(f"Unknown type {name!r}") from None

    def leaf(self, name: str, *args: object, **kwargs: object) -> Checker:
        """Build the leaf ``name`` with ``args``."""

        try:
            factory = self.leaves[name]
        except KeyError:
            raise UnknownCheckerError(f"Unknown leaf {name!r}") from None
        return factory(self, *args, **kwargs)

    def primitive(self, name: str) -> Checker:
        """Resolve a primitive marker: a type, or a leaf taking no arguments."""

        if name == "any":
            return self.universal
        if name in self._checkers:
            return self._checkers[name]
        if name in self.leaves:
            return self.leaf(name)
        raise UnknownCheckerError(f"Unknown primitive {name!r}")

    def method(self, left: Checker, name: str) -> Callable[..., Checker]:
        """Return ``name`` bound to ``left``.

        Combinators receive ``left`` as their first argument. Leaves are built
        with the call's arguments and conjoined with ``left``.
        """

        if name in self.combinators:
            return partial(self.combinators[name], left)
        if name in self.leaves:

            def conjoined(*args: object, **kwargs: object) -> Checker:
                return self.method(left, "and_")(self.leaf(name, *args, **kwargs))

            return conjoined
        raise UnknownCheckerError(f"Unknown combinator {name!r}")

    def attribute(self, name: str) -> Checker | Callable[..., Checker]:
        """Resolve ``name`` the way the dispatcher exposes it.

        Types are checkers, leaves are factories and combinators are bound to
        the universal checker.
        """

        if name in self._checkers:
            return self._checkers[name]
        if name in self.leaves:
            return partial(self.leaf, name)
        if name in self.combinators:
            return partial(self.combinators[name], self.universal)
        raise UnknownCheckerError(f"Unknown checker {name!r}")

    def resolve(self, *descriptions: object) -> Checker:
        """Resolve schema descriptions into a checker bound to this registry."""

        return resolve_descriptions(self, *descriptions)

    def extend(
        self,
        *,
        types: Mapping[str, TypeFactory] | None = None,
        leaves: Mapping[str, Leaf] | None = None,
        combinators: Mapping[str, Combinator] | None = None,
    ) -> Registry:
        """Return a new registry with the given entries added or replaced."""

        extended = Registry(
            types={**self.types, **(types or {})},
            leaves={**self.leaves, **(leaves or {})},
            combinators={**self.combinators, **(combinators or {})},
        )
        logger.debug(
            "Registry extended.",
            event="registry.extended",
            context={
                "types": sorted(types or ()),
                "leaves": sorted(leaves or ()),
                "combinators": sorted(combinators or ()),
            },
        )
        return extended


def _check_names(tables: Mapping[str, Mapping[str, object]]) -> None:
    seen: dict[str, str] = {}
    for table, entries in tables.items():
        for name in entries:
            if not name.isidentifier() or name.startswith("_"):
                raise ValueError(f"Invalid checker name {name!r} in {table}")
            if name in RESERVED_NAMES:
                raise ValueError(f"Checker name {name!r} is reserved")
            if name in seen:
                raise ValueError(
                    f"Checker name {name!r} registered in both {seen[name]} and {table}"
                )
            seen[name] = table


@cache
def default_registry() -> Registry:
    """Return the shared registry holding the built-in tables."""

    return Registry()
