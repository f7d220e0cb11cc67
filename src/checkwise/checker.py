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

"""Checker type and the hydrator that builds checkers from raw operations.

A *raw check* is any object exposing ``matches``, ``coerce`` and ``validate``
callables of the form ``(value, status) -> result``. Raw checks know nothing
about diagnostic paths, scoring or error enrichment; :func:`hydrate` wraps one
into a :class:`Checker` that handles all three uniformly:

1. a :class:`~checkwise.status.Status` is allocated when the caller passes
   none;
2. the checker's ``name`` and any extra positional path segments are pushed;
3. the raw operation runs;
4. the outcome is recorded with the checker's ``weight`` (``matches`` records
   its verdict, ``coerce``/``validate`` succeed unless they raise);
5. the pushed segments are popped, whatever happened;
6. the raw result is returned.

An exception with a message raised by the raw operation becomes a
:class:`~checkwise.errors.CheckError` carrying the failing path, a plain
``AssertionError`` included. Only a
:class:`~checkwise.errors.ContractViolation` propagates untouched.
Combinators registered on the checker's :class:`~checkwise.registry.Registry`
are reachable as attributes::

    positive = as_.number.gte(0)
    either = as_.string | as_.number
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import field
from typing import TYPE_CHECKING, Literal, Protocol, cast, override

from .dataclasses import FrozenDataclass
from .errors import CheckError, ContractViolation, UnknownCheckerError
from .logging import get_logger
from .status import DEFAULT_WEIGHT, Status
from .types import PathSegment

if TYPE_CHECKING:
    from .registry import Registry

__all__ = [
    "Checker",
    "Operation",
    "Operations",
    "RawCheck",
    "hydrate",
    "indirect",
]

logger = get_logger(__name__)

type Operation = Literal["matches", "coerce", "validate"]


class RawCheck(Protocol):
    """The three bare operations a checker is built from."""

    def matches(self, value: object, status: Status, /) -> bool: ...

    def coerce(self, value: object, status: Status, /) -> object: ...

    def validate(self, value: object, status: Status, /) -> object: ...


@FrozenDataclass()
class Operations:
    """Plain container of raw operations, the usual input to :func:`hydrate`."""

    matches: Callable[[object, Status], bool]
    coerce: Callable[[object, Status], object]
    validate: Callable[[object, Status], object]


def indirect(get_method: Callable[[Operation], Callable[..., object]]) -> Operations:
    """Build raw operations by asking ``get_method`` for each operation name.

    Handy for combinators whose three operations share one shape::

        indirect(lambda op: lambda value, status: getattr(inner, op)(value, status))
    """

    return Operations(
        matches=cast(Callable[[object, Status], bool], get_method("matches")),
        coerce=get_method("coerce"),
        validate=get_method("validate"),
    )


@FrozenDataclass(repr=False)
class Checker:
    """A composable, immutable schema checker.

    Attributes:
        raw: The unwrapped operations.
        name: Path segment pushed on entry, ``None`` for anonymous checkers.
        weight: Contribution of this checker's outcome to ``Status.quality``.
        label: Human readable description used in ``repr``.
        registry: Registry whose combinators are available as attributes.
            ``None`` selects the default registry.
    """

    raw: RawCheck
    name: str | None = None
    weight: float = DEFAULT_WEIGHT
    label: str | None = field(default=None, compare=False)
    registry: Registry | None = field(default=None, compare=False)

    def matches(
        self, value: object, status: Status | None = None, *path: PathSegment
    ) -> bool:
        """Return whether ``value`` conforms, recording diagnostics on ``status``."""

        return bool(self._invoke("matches", value, status, path))

    def coerce(
        self, value: object, status: Status | None = None, *path: PathSegment
    ) -> object:
        """Return ``value`` transformed toward the expected shape."""

        return self._invoke("coerce", value, status, path)

    def validate(
        self, value: object, status: Status | None = None, *path: PathSegment
    ) -> object:
        """Coerce ``value`` and raise :class:`CheckError` if it cannot conform."""

        return self._invoke("validate", value, status, path)

    @property
    def display_name(self) -> str:
        return self.label or self.name or "anonymous"

    @property
    def resolved_registry(self) -> Registry:
        if self.registry is not None:
            return self.registry
        from .registry import default_registry

        return default_registry()

    def __getattr__(self, name: str) -> Callable[..., Checker]:
        if name.startswith("_"):
            raise AttributeError(name)
        try:
            return self.resolved_registry.method(self, name)
        except UnknownCheckerError:
            raise UnknownCheckerError(
                f"{type(self).__name__!r} object has no combinator {name!r}"
            ) from None

    def __and__(self, other: object) -> Checker:
        return self.resolved_registry.method(self, "and_")(other)

    def __or__(self, other: object) -> Checker:
        return self.resolved_registry.method(self, "or_")(other)

    def __invert__(self) -> Checker:
        return self.resolved_registry.method(self, "not_")()

    @override
    def __repr__(self) -> str:
        return f"Checker({self.display_name})"

    def _invoke(
        self,
        operation: Operation,
        value: object,
        status: Status | None,
        path: tuple[PathSegment, ...],
    ) -> object:
        status = Status() if status is None else status
        count = status.push(self.name, path)
        try:
            result = getattr(self.raw, operation)(value, status)
        except ContractViolation:
            raise
        except CheckError:
            status.record(False, self.weight)
            raise
        except Exception as error:
            location = status.record(False, self.weight)
            reason = str(error)
            if not reason:
                raise
            logger.debug(
                "Hard failure while checking value.",
                event="checker.hard_failure",
                context={
                    "operation": operation,
                    "path": location,
                    "error": type(error).__name__,
                },
            )
            raise CheckError(reason, path=status.path) from error
        else:
            status.record(operation != "matches" or bool(result), self.weight)
            return result
        finally:
            status.pop(count)


def hydrate(
    raw: RawCheck,
    name: str | None = None,
    weight: float = DEFAULT_WEIGHT,
    *,
    registry: Registry | None = None,
    label: str | None = None,
) -> Checker:
    """Wrap raw operations into a :class:`Checker`.

    ``name`` becomes the checker's path segment and ``weight`` its contribution
    to the quality score. Logical and structural wrappers use a weight of zero
    so they never move the score on their own.
    """

    if isinstance(raw, Checker):
        return raw
    if weight < 0:
        raise ValueError(f"Checker weight must be non-negative, got {weight!r}")
    return Checker(raw, name=name, weight=weight, label=label, registry=registry)
