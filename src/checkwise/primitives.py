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

"""Primitive type checkers.

Each factory takes the owning registry (so the resulting checker exposes that
registry's combinators) and returns a leaf :class:`~checkwise.checker.Checker`.

==============  ==========================================  ======================
Type            Matches                                     Coerces
==============  ==========================================  ======================
``string``      ``str``                                     ``str()``; ``None`` → ``""``
``number``      ``int``/``float`` (not ``bool``)            numeric strings, bools
``boolean``     ``bool``                                    ``"yes"``/``"off"``…, ``bool()``
``date``        ``datetime``/``date``                       ISO strings, timestamps
``object``      ``Mapping``                                 ``dict()``; ``None`` → ``{}``
``array``       ``list``/``tuple``                          tuples, scalars wrapped
``json``        strings holding valid JSON                  ``json.dumps``
``error``       only ``MISSING`` (field must be absent)     ``MISSING``
==============  ==========================================  ======================
"""

from __future__ import annotations

import inspect
import json
from collections.abc import Callable, Mapping
from datetime import UTC, date, datetime
from typing import TYPE_CHECKING

from .checker import Checker
from .static import TYPE_WEIGHT, static_check
from .types import MISSING

if TYPE_CHECKING:
    from .registry import Registry

__all__ = [
    "TYPES",
    "array",
    "boolean",
    "date_",
    "error",
    "function",
    "instanceof",
    "json_",
    "number",
    "object_",
    "string",
]

_TRUTHY = frozenset({"true", "1", "yes", "on"})
_FALSY = frozenset({"false", "0", "no", "off"})


def _is_string(value: object) -> bool:
    return isinstance(value, str)


def _to_string(value: object) -> str:
    if value is None or value is MISSING:
        return ""
    return value if isinstance(value, str) else str(value)


def _is_number(value: object) -> bool:
    return isinstance(value, int | float) and not isinstance(value, bool)


def _to_number(value: object) -> object:
    if value is MISSING or _is_number(value):
        return value
    if value is None:
        return 0
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, str):
        text = value.strip()
        try:
            return int(text)
        except ValueError:
            pass
        try:
            return float(text)
        except ValueError:
            raise ValueError(f"Cannot interpret {value!r} as number") from None
    raise TypeError(f"Cannot interpret {type(value).__name__} as number")


def _is_boolean(value: object) -> bool:
    return isinstance(value, bool)


def _to_boolean(value: object) -> object:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUTHY:
            return True
        if lowered in _FALSY:
            return False
        raise ValueError(f"Cannot interpret {value!r} as boolean")
    return bool(value)


def _is_date(value: object) -> bool:
    return isinstance(value, date)


def _to_date(value: object) -> object:
    if value is MISSING or isinstance(value, date):
        return value
    if isinstance(value, str):
        return datetime.fromisoformat(value.strip())
    if _is_number(value):
        return datetime.fromtimestamp(value, tz=UTC)  # pyright: ignore[reportArgumentType]
    raise TypeError(f"Cannot interpret {type(value).__name__} as date")


def _is_object(value: object) -> bool:
    return isinstance(value, Mapping)


def _to_object(value: object) -> object:
    if isinstance(value, Mapping):
        return value
    if value is None or value is MISSING:
        return {}
    return dict(value)  # pyright: ignore[reportCallIssue, reportArgumentType]


def _is_array(value: object) -> bool:
    return isinstance(value, list | tuple)


def _to_array(value: object) -> object:
    if isinstance(value, list):
        return value
    if isinstance(value, tuple):
        return list(value)  # pyright: ignore[reportUnknownArgumentType]
    if value is MISSING:
        return []
    return [value]


def _is_json(value: object) -> bool:
    if not isinstance(value, str):
        return False
    try:
        json.loads(value)
    except ValueError:
        return False
    return True


def _to_json(value: object) -> object:
    if value is MISSING or _is_json(value):
        return value
    return json.dumps(value)


def _is_missing(value: object) -> bool:
    return value is MISSING


def _to_missing(value: object) -> object:
    return MISSING


def string(registry: Registry | None = None) -> Checker:
    return static_check(
        "string", _is_string, _to_string, "Not a string", TYPE_WEIGHT, registry=registry
    )


def number(registry: Registry | None = None) -> Checker:
    return static_check(
        "number", _is_number, _to_number, "Not a number", TYPE_WEIGHT, registry=registry
    )


def boolean(registry: Registry | None = None) -> Checker:
    return static_check(
        "boolean",
        _is_boolean,
        _to_boolean,
        "Not a boolean",
        TYPE_WEIGHT,
        registry=registry,
    )


def date_(registry: Registry | None = None) -> Checker:
    return static_check(
        "date", _is_date, _to_date, "Not a date", TYPE_WEIGHT, registry=registry
    )


def object_(registry: Registry | None = None) -> Checker:
    return static_check(
        "object", _is_object, _to_object, "Not an object", TYPE_WEIGHT, registry=registry
    )


def array(registry: Registry | None = None) -> Checker:
    return static_check(
        "array", _is_array, _to_array, "Not an array", TYPE_WEIGHT, registry=registry
    )


def json_(registry: Registry | None = None) -> Checker:
    return static_check(
        "json", _is_json, _to_json, "Not JSON", TYPE_WEIGHT, registry=registry
    )


def error(registry: Registry | None = None) -> Checker:
    """Checker for fields that must be absent."""

    return static_check(
        "error", _is_missing, _to_missing, "Not allowed", registry=registry
    )


def function(registry: Registry | None = None, arity: int | None = None) -> Checker:
    """Checker for callables, optionally accepting ``arity`` positional arguments.

    Non-callable values coerce to a function returning that value.
    """

    def accepts(value: object) -> bool:
        if not callable(value):
            return False
        if arity is None:
            return True
        try:
            inspect.signature(value).bind(*range(arity))
        except TypeError:
            return False
        except ValueError:
            # Builtins without an introspectable signature.
            return True
        return True

    def to_function(value: object) -> object:
        if callable(value):
            return value
        return _constant(value)

    label = "function" if arity is None else f"function({arity})"
    return static_check(
        label, accepts, to_function, "Not a function", TYPE_WEIGHT, registry=registry
    )


def instanceof(registry: Registry | None, cls: type[object]) -> Checker:
    """Checker for instances of ``cls``; other values coerce via ``cls(value)``."""

    if not isinstance(cls, type):
        raise TypeError(f"instanceof expects a class, got {cls!r}")

    def is_instance(value: object) -> bool:
        return isinstance(value, cls)

    def to_instance(value: object) -> object:
        if value is MISSING or isinstance(value, cls):
            return value
        return cls(value)  # pyright: ignore[reportCallIssue]

    return static_check(
        f"instanceof({cls.__name__})",
        is_instance,
        to_instance,
        f"Not an instance of {cls.__name__}",
        TYPE_WEIGHT,
        registry=registry,
    )


def _constant(value: object) -> Callable[..., object]:
    def constant(*args: object, **kwargs: object) -> object:
        return value

    return constant


TYPES: Mapping[str, Callable[[Registry | None], Checker]] = {
    "string": string,
    "number": number,
    "boolean": boolean,
    "date": date_,
    "object": object_,
    "array": array,
    "json": json_,
    "error": error,
}
"""Argument-free type checkers installed in the default registry."""
