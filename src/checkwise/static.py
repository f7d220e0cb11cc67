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

"""Factory for leaf checkers defined by a predicate and a coercion."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

from .checker import Checker, Operations, hydrate
from .dbc import pure
from .status import DEFAULT_WEIGHT, Status

if TYPE_CHECKING:
    from .registry import Registry

__all__ = ["TYPE_WEIGHT", "static_check", "static_operations"]

TYPE_WEIGHT = 0.5
"""Weight of plain type checks, weaker evidence than equality or patterns."""


def static_operations(
    predicate: Callable[[object], bool],
    coerce: Callable[[object], object],
    message: str,
) -> Operations:
    """Return raw operations for a leaf check.

    ``predicate`` must be side-effect free; it runs under the ``pure`` contract
    when contracts are enabled. ``coerce`` must be idempotent. ``validate``
    coerces and raises ``ValueError(message)`` when the result still fails the
    predicate.
    """

    checked = pure(predicate)

    def matches(value: object, status: Status) -> bool:
        return bool(checked(value))

    def coerce_value(value: object, status: Status) -> object:
        return coerce(value)

    def validate(value: object, status: Status) -> object:
        result = coerce(value)
        if not checked(result):
            raise ValueError(message)
        return result

    return Operations(matches=matches, coerce=coerce_value, validate=validate)


def static_check(
    name: str,
    predicate: Callable[[object], bool],
    coerce: Callable[[object], object],
    message: str,
    weight: float = DEFAULT_WEIGHT,
    *,
    registry: Registry | None = None,
) -> Checker:
    """Build a leaf :class:`Checker` from a predicate and a coercion.

    ``name`` labels the checker. Leaf checkers push no path segment of their
    own, so a failure reads as the location of the value (``address.zip``)
    rather than the kind of check that failed.
    """

    return hydrate(
        static_operations(predicate, coerce, message),
        weight=weight,
        registry=registry,
        label=name,
    )
