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

"""Value-level leaf checks: patterns, equality and ordering.

Each factory takes the owning registry followed by its arguments. Called on a
checker (``as_.number.gte(0)``) the leaf is conjoined with the receiver.
"""

from __future__ import annotations

import operator
import re
from collections.abc import Callable
from typing import TYPE_CHECKING

from ..checker import Checker
from ..errors import SchemaDescriptionError
from ..static import static_check
from ..types import MISSING

if TYPE_CHECKING:
    from ..registry import Registry

__all__ = ["eq", "gt", "gte", "lt", "lte", "regexp"]


def regexp(
    registry: Registry | None, pattern: str | re.Pattern[str], flags: int = 0
) -> Checker:
    """Match strings containing ``pattern`` (``re.search`` semantics)."""

    if isinstance(pattern, re.Pattern):
        if flags:
            raise SchemaDescriptionError(
                "flags cannot be combined with a compiled pattern"
            )
        compiled = pattern
    elif isinstance(pattern, str):
        compiled = re.compile(pattern, flags)
    else:
        raise SchemaDescriptionError(f"regexp expects a pattern, got {pattern!r}")

    def search(value: object) -> bool:
        return isinstance(value, str) and compiled.search(value) is not None

    def stringify(value: object) -> object:
        if value is None or value is MISSING:
            return ""
        return value if isinstance(value, str) else str(value)

    return static_check(
        f"regexp({compiled.pattern!r})",
        search,
        stringify,
        f"Does not match {compiled.pattern!r}",
        registry=registry,
    )


def eq(registry: Registry | None, expected: object) -> Checker:
    """Match values equal to ``expected``; coercion yields ``expected``."""

    def equals(value: object) -> bool:
        return value == expected

    def constant(value: object) -> object:
        return expected

    return static_check(
        f"eq({expected!r})",
        equals,
        constant,
        f"Not equal to {expected!r}",
        registry=registry,
    )


def _ordering(
    symbol: str, compare: Callable[[object, object], object]
) -> Callable[[Registry | None, object], Checker]:
    def factory(registry: Registry | None, bound: object) -> Checker:
        def within(value: object) -> bool:
            if value is MISSING:
                return False
            try:
                return bool(compare(value, bound))
            except TypeError:
                return False

        def identity(value: object) -> object:
            return value

        return static_check(
            f"{symbol} {bound!r}",
            within,
            identity,
            f"Must be {symbol} {bound!r}",
            registry=registry,
        )

    return factory


lt = _ordering("<", operator.lt)
lte = _ordering("<=", operator.le)
gt = _ordering(">", operator.gt)
gte = _ordering(">=", operator.ge)
