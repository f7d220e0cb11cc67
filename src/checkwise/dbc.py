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

"""Design by contract utilities for :mod:`checkwise`.

Contracts are off unless ``CHECKWISE_DBC`` is set to a truthy value or one of
:func:`enable_dbc` / :func:`dbc_enabled` is used. When off, every decorator
is a thin pass-through.

A failed contract raises :class:`~checkwise.errors.ContractViolation`. The
checker hydrator lets it through untouched, so a broken ``Status`` invariant
or an impure predicate surfaces as a bug rather than as a failed check.
"""

from __future__ import annotations

import builtins
import copy
import logging
import os
from collections.abc import Callable, Iterable, Iterator, Mapping, Sequence
from contextlib import ExitStack, contextmanager
from functools import wraps
from pathlib import Path
from typing import Literal, ParamSpec, TypeVar, cast

from .errors import ContractViolation
from .types import ContractResult

P = ParamSpec("P")
R = TypeVar("R")
T = TypeVar("T", bound=object)

type ContractKind = Literal["require", "ensure", "invariant", "pure"]
type Predicate = Callable[..., ContractResult | object]

_ENV_FLAG = "CHECKWISE_DBC"
_FALSY_FLAGS = frozenset({"", "0", "false", "off", "no"})
_forced_state: bool | None = None


def dbc_active() -> bool:
    """Return ``True`` when contracts should be evaluated."""

    if _forced_state is not None:
        return _forced_state
    raw = os.getenv(_ENV_FLAG)
    return raw is not None and raw.strip().lower() not in _FALSY_FLAGS


def enable_dbc() -> None:
    """Force contract checks on."""

    global _forced_state
    _forced_state = True


def disable_dbc() -> None:
    """Force contract checks off."""

    global _forced_state
    _forced_state = False


@contextmanager
def dbc_enabled(*, active: bool = True) -> Iterator[None]:
    """Temporarily set the contract flag inside a ``with`` block."""

    global _forced_state
    previous = _forced_state
    _forced_state = active
    try:
        yield
    finally:
        _forced_state = previous


def _target(func: object) -> str:
    return getattr(func, "__qualname__", repr(func))


def _violation(kind: ContractKind, func: object, message: str) -> ContractViolation:
    return ContractViolation(
        f"{kind} contract for {_target(func)} {message}",
        kind=kind,
        target=_target(func),
    )


def _verdict(result: ContractResult | object) -> tuple[bool, str | None]:
    """Split a predicate result into its outcome and optional detail."""

    if not isinstance(result, tuple):
        return result is not None and bool(result), None
    parts = cast(Sequence[object], result)
    if not parts:
        raise TypeError("Contract predicates must not return empty tuples")
    detail = str(parts[1]) if len(parts) > 1 else None
    return bool(parts[0]), detail


def _check(
    kind: ContractKind,
    func: Callable[..., object],
    predicates: Iterable[Predicate],
    args: tuple[object, ...],
    kwargs: Mapping[str, object],
) -> None:
    for predicate in predicates:
        try:
            result = predicate(*args, **kwargs)
        except ContractViolation:
            raise
        except Exception as exc:
            raise _violation(
                kind, func, f"raised {type(exc).__name__}: {exc}"
            ) from exc
        passed, detail = _verdict(result)
        if passed:
            continue
        name = getattr(predicate, "__name__", repr(predicate))
        message = f"failed via {name}."
        if detail:
            message = f"{message} Details: {detail}"
        raise _violation(kind, func, message)


def _nonempty(decorator: str, predicates: tuple[Predicate, ...]) -> None:
    if not predicates:
        raise ValueError(f"@{decorator} expects at least one predicate")


def require(*predicates: Predicate) -> Callable[[Callable[P, R]], Callable[P, R]]:
    """Check preconditions against the call arguments."""

    _nonempty("require", predicates)

    def decorator(func: Callable[P, R]) -> Callable[P, R]:
        @wraps(func)
        def wrapped(*args: P.args, **kwargs: P.kwargs) -> R:
            if dbc_active():
                _check("require", func, predicates, args, kwargs)
            return func(*args, **kwargs)

        return wrapped

    return decorator


def ensure(*predicates: Predicate) -> Callable[[Callable[P, R]], Callable[P, R]]:
    """Check postconditions.

    Predicates receive the call arguments plus ``result=`` on return or
    ``exception=`` when the callable raises.
    """

    _nonempty("ensure", predicates)

    def decorator(func: Callable[P, R]) -> Callable[P, R]:
        @wraps(func)
        def wrapped(*args: P.args, **kwargs: P.kwargs) -> R:
            if not dbc_active():
                return func(*args, **kwargs)
            try:
                result = func(*args, **kwargs)
            except Exception as exc:
                _check("ensure", func, predicates, args, {**kwargs, "exception": exc})
                raise
            _check("ensure", func, predicates, args, {**kwargs, "result": result})
            return result

        return wrapped

    return decorator


def invariant(*predicates: Predicate) -> Callable[[type[T]], type[T]]:
    """Check class invariants after ``__init__`` and around public methods."""

    _nonempty("invariant", predicates)

    def guard(method: Callable[..., object]) -> Callable[..., object]:
        @wraps(method)
        def wrapped(self: object, *args: object, **kwargs: object) -> object:
            if not dbc_active():
                return method(self, *args, **kwargs)
            _check("invariant", method, predicates, (self,), {})
            try:
                return method(self, *args, **kwargs)
            finally:
                _check("invariant", method, predicates, (self,), {})

        return wrapped

    def decorator(cls: type[T]) -> type[T]:
        init = cls.__init__

        @wraps(init)
        def checked_init(self: object, *args: object, **kwargs: object) -> None:
            init(self, *args, **kwargs)
            if dbc_active():
                _check("invariant", init, predicates, (self,), {})

        type.__setattr__(cls, "__init__", checked_init)
        for name, member in list(cls.__dict__.items()):
            if name.startswith("_") or not callable(member):
                continue
            if isinstance(member, staticmethod | classmethod):
                continue
            setattr(cls, name, guard(member))
        return cls

    return decorator


_UNCOMPARABLE = object()

# (owner, attribute, label) triples a pure callable may not touch.
_FORBIDDEN: tuple[tuple[object, str, str], ...] = (
    (builtins, "open", "builtins.open"),
    (Path, "write_text", "Path.write_text"),
    (logging.Logger, "_log", "logging"),
)


def _snapshot(value: object) -> object:
    # Identity-compared objects cannot reveal mutation through ``!=``.
    if type(value).__eq__ is object.__eq__:
        return _UNCOMPARABLE
    try:
        return copy.deepcopy(value)
    except Exception:
        return _UNCOMPARABLE


def _mutated(
    args: tuple[object, ...],
    kwargs: Mapping[str, object],
    before: Mapping[int | str, object],
) -> Iterator[str]:
    current: dict[int | str, object] = {**dict(enumerate(args)), **kwargs}
    for key, snapshot in before.items():
        if snapshot is _UNCOMPARABLE:
            continue
        value = current[key]
        if value is not snapshot and value != snapshot:
            yield (
                f"positional argument {key}"
                if isinstance(key, int)
                else f"keyword argument '{key}'"
            )


@contextmanager
def _forbid_side_effects(func: Callable[..., object]) -> Iterator[None]:
    def blocked(label: str) -> Callable[..., object]:
        def raiser(*args: object, **kwargs: object) -> object:
            raise _violation("pure", func, f"forbids calling {label}")

        return raiser

    with ExitStack() as stack:
        for owner, attribute, label in _FORBIDDEN:
            saved = getattr(owner, attribute)
            setattr(owner, attribute, blocked(label))
            stack.callback(setattr, owner, attribute, saved)
        yield


def pure(func: Callable[P, R]) -> Callable[P, R]:  # noqa: UP047
    """Check that ``func`` behaves like a pure function.

    Used for checker predicates: they must not mutate the value they inspect,
    open files or log.
    """

    @wraps(func)
    def wrapped(*args: P.args, **kwargs: P.kwargs) -> R:
        if not dbc_active():
            return func(*args, **kwargs)

        before: dict[int | str, object] = {
            index: _snapshot(arg) for index, arg in enumerate(args)
        }
        before.update((key, _snapshot(value)) for key, value in kwargs.items())
        with _forbid_side_effects(func):
            result = func(*args, **kwargs)
        mutated = next(_mutated(args, kwargs, before), None)
        if mutated is not None:
            raise _violation("pure", func, f"detected mutation of {mutated}")
        return result

    return wrapped


__all__ = [
    "ContractKind",
    "Predicate",
    "dbc_active",
    "dbc_enabled",
    "disable_dbc",
    "enable_dbc",
    "ensure",
    "invariant",
    "pure",
    "require",
]
