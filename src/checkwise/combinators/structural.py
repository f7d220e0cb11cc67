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

"""Structural combinators: shape matching, length checks and path naming."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import cast

from ..checker import Checker, Operation, Operations, hydrate
from ..errors import SchemaDescriptionError
from ..status import Status
from ..types import MISSING

__all__ = ["named", "size", "with_"]


def with_(left: Checker, template: object) -> Checker:
    """Check the fields or items of values accepted by ``left``.

    A mapping template checks each listed key with the checker its value
    describes; keys absent from the input are seen as ``MISSING`` and keys not
    in the template are kept as they are. A list or tuple template checks every
    item against the disjunction of its elements (any item when empty).

    Keys and indices are pushed as path segments so nested failures read as
    ``address.zip`` or ``tags.2``. ``matches`` evaluates every field, so all
    failing fields are reported, not just the first.
    """

    registry = left.resolved_registry
    if isinstance(template, Mapping):
        fields = tuple(
            (key, registry.resolve(description))
            for key, description in cast(Mapping[object, object], template).items()
        )
        return _keyed(left, fields)
    if isinstance(template, list | tuple):
        return _itemized(left, registry.resolve(*cast(Sequence[object], template)))
    raise SchemaDescriptionError(
        f"with_ expects a mapping or sequence template, got {type(template).__name__}"
    )


def _field(value: object, key: object) -> object:
    if isinstance(value, Mapping):
        return cast(Mapping[object, object], value).get(key, MISSING)
    if isinstance(key, str):
        return getattr(value, key, MISSING)
    return MISSING


def _keyed(left: Checker, fields: tuple[tuple[object, Checker], ...]) -> Checker:
    def matches(value: object, status: Status) -> bool:
        if not left.matches(value, status):
            return False
        results = [
            checker.matches(_field(value, key), status, key)
            for key, checker in fields
        ]
        return all(results)

    def transform(operation: Operation, value: object, status: Status) -> object:
        shaped = getattr(left, operation)(value, status)
        result: dict[object, object] = (
            dict(cast(Mapping[object, object], shaped))
            if isinstance(shaped, Mapping)
            else {}
        )
        for key, checker in fields:
            item = getattr(checker, operation)(_field(shaped, key), status, key)
            if item is MISSING:
                result.pop(key, None)
            else:
                result[key] = item
        return result

    return hydrate(
        Operations(
            matches=matches,
            coerce=lambda value, status: transform("coerce", value, status),
            validate=lambda value, status: transform("validate", value, status),
        ),
        weight=0,
        registry=left.registry,
        label=f"{left.display_name} with {{{', '.join(str(key) for key, _ in fields)}}}",
    )


def _itemized(left: Checker, items: Checker) -> Checker:
    def matches(value: object, status: Status) -> bool:
        if not left.matches(value, status):
            return False
        if not isinstance(value, list | tuple):
            return False
        results = [
            items.matches(item, status, index)
            for index, item in enumerate(cast(Sequence[object], value))
        ]
        return all(results)

    def transform(operation: Operation, value: object, status: Status) -> object:
        shaped = getattr(left, operation)(value, status)
        if not isinstance(shaped, list | tuple):
            raise TypeError(
                f"{left.display_name} produced {type(shaped).__name__}, not a sequence"
            )
        return [
            getattr(items, operation)(item, status, index)
            for index, item in enumerate(cast(Sequence[object], shaped))
        ]

    return hydrate(
        Operations(
            matches=matches,
            coerce=lambda value, status: transform("coerce", value, status),
            validate=lambda value, status: transform("validate", value, status),
        ),
        weight=0,
        registry=left.registry,
        label=f"{left.display_name} with [{items.display_name}]",
    )


def size(left: Checker, *descriptions: object) -> Checker:
    """Check ``len()`` of values accepted by ``left``.

    ``as_.string.size(as_.gte(1))`` accepts non-empty strings; a bare number
    (``size(3)``) requires an exact length. Values without a length fail
    ``matches`` softly and make ``validate`` raise.
    """

    registry = left.resolved_registry
    length = registry.resolve(*descriptions)

    def matches(value: object, status: Status) -> bool:
        if not left.matches(value, status):
            return False
        shaped = left.coerce(value, status)
        if not hasattr(shaped, "__len__"):
            return False
        return length.matches(len(cast(Sequence[object], shaped)), status, "length")

    def validate(value: object, status: Status) -> object:
        shaped = left.validate(value, status)
        length.validate(len(cast(Sequence[object], shaped)), status, "length")
        return shaped

    return hydrate(
        Operations(
            matches=matches,
            coerce=lambda value, status: left.coerce(value, status),
            validate=validate,
        ),
        weight=0,
        registry=registry,
        label=f"{left.display_name} sized {length.display_name}",
    )


def named(left: Checker, name: str) -> Checker:
    """Return ``left`` pushing ``name`` as its path segment."""

    if not isinstance(name, str):
        raise SchemaDescriptionError(f"named expects a string, got {name!r}")
    return left.update(name=name or None)  # pyright: ignore[reportAttributeAccessIssue]
