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

"""The ``as_`` dispatcher, the public entry point for building checkers."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import override

from .checker import Checker
from .combinators import Combinator, Leaf
from .errors import UnknownCheckerError
from .registry import Registry, TypeFactory, default_registry
from .status import Status
from .types import PathSegment

__all__ = ["Dispatcher", "as_", "extend"]


class Dispatcher:
    """Callable front door over a :class:`~checkwise.registry.Registry`.

    ``as_(description, ...)`` resolves schema descriptions; with several
    descriptions the alternatives are OR-ed. Registry entries are attributes:

    - types are checkers: ``as_.string``
    - leaves are factories: ``as_.gte(0)``, ``as_.regexp(r"^\\d+$")``
    - combinators apply to the universal checker: ``as_.with_({"id": int})``

    The dispatcher itself behaves like the universal checker, accepting every
    value unchanged.
    """

    __slots__ = ("_registry",)

    def __init__(self, registry: Registry | None = None) -> None:
        self._registry = default_registry() if registry is None else registry

    @property
    def registry(self) -> Registry:
        return self._registry

    def __call__(self, *descriptions: object) -> Checker:
        return self._registry.resolve(*descriptions)

    def __getattr__(self, name: str) -> Checker | Callable[..., Checker]:
        if name.startswith("_"):
            raise AttributeError(name)
        try:
            return self._registry.attribute(name)
        except UnknownCheckerError:
            raise UnknownCheckerError(
                f"{type(self).__name__!r} object has no checker {name!r}"
            ) from None

    @override
    def __repr__(self) -> str:
        return f"Dispatcher({self._registry!r})"

    def matches(
        self, value: object, status: Status | None = None, *path: PathSegment
    ) -> bool:
        return self._registry.universal.matches(value, status, *path)

    def coerce(
        self, value: object, status: Status | None = None, *path: PathSegment
    ) -> object:
        return self._registry.universal.coerce(value, status, *path)

    def validate(
        self, value: object, status: Status | None = None, *path: PathSegment
    ) -> object:
        return self._registry.universal.validate(value, status, *path)

    def extend(
        self,
        *,
        types: Mapping[str, TypeFactory] | None = None,
        leaves: Mapping[str, Leaf] | None = None,
        combinators: Mapping[str, Combinator] | None = None,
    ) -> Dispatcher:
        """Return a dispatcher over an extended copy of this registry."""

        return Dispatcher(
            self._registry.extend(types=types, leaves=leaves, combinators=combinators)
        )


as_ = Dispatcher()
"""Dispatcher over the default registry."""


def extend(
    *,
    types: Mapping[str, TypeFactory] | None = None,
    leaves: Mapping[str, Leaf] | None = None,
    combinators: Mapping[str, Combinator] | None = None,
) -> Dispatcher:
    """Return a dispatcher over the default registry plus the given entries."""

    return as_.extend(types=types, leaves=leaves, combinators=combinators)
