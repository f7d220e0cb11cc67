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

"""Common type definitions shared across checkwise.

:data:`MISSING`
    Sentinel presented to field checkers when a mapping key (or attribute) is
    absent. Coercions that return ``MISSING`` cause structural checkers to
    omit the key from their output.

:data:`PathSegment`
    Values accepted as extra diagnostic path segments. Segments are converted
    to strings when pushed; ``None`` and empty strings are dropped.

:data:`ContractResult`
    Return type for design-by-contract predicates. Can be:

    - ``bool``: Simple pass/fail
    - ``tuple[bool, *tuple[object, ...]]``: Pass/fail with diagnostic message(s)
    - ``None``: Treated as failing
"""

from __future__ import annotations

from typing import Final, final, override

__all__ = [
    "MISSING",
    "ContractResult",
    "Missing",
    "PathSegment",
]


@final
class Missing:
    """Type of the :data:`MISSING` sentinel.

    Only one instance exists. Copies, deep copies and pickles all resolve to
    the same object so identity checks (``value is MISSING``) stay valid.
    """

    __slots__ = ()
    _instance: Missing | None = None

    def __new__(cls) -> Missing:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    @override
    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False

    def __copy__(self) -> Missing:
        return self

    def __deepcopy__(self, memo: dict[int, object]) -> Missing:
        return self

    @override
    def __reduce__(self) -> str:
        return "MISSING"


MISSING: Final = Missing()

type PathSegment = str | int | None

type ContractResult = bool | tuple[bool, *tuple[object, ...]] | None
