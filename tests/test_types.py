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

"""Tests for shared types, errors and dataclass helpers."""

from __future__ import annotations

import copy
import pickle
from dataclasses import FrozenInstanceError

import pytest

from checkwise import (
    MISSING,
    CheckError,
    CheckwiseError,
    ContractViolation,
    Missing,
    SchemaDescriptionError,
    UnknownCheckerError,
)
from checkwise.dataclasses import FrozenDataclass

pytestmark = pytest.mark.core


def test_missing_is_a_falsy_singleton() -> None:
    assert Missing() is MISSING
    assert not MISSING
    assert repr(MISSING) == "MISSING"


def test_missing_survives_copies_and_pickling() -> None:
    assert copy.copy(MISSING) is MISSING
    assert copy.deepcopy({"key": MISSING})["key"] is MISSING
    assert pickle.loads(pickle.dumps(MISSING)) is MISSING


def test_error_hierarchy() -> None:
    assert issubclass(CheckError, CheckwiseError)
    assert issubclass(CheckError, ValueError)
    assert issubclass(SchemaDescriptionError, TypeError)
    assert issubclass(UnknownCheckerError, AttributeError)
    assert issubclass(ContractViolation, CheckwiseError)
    assert issubclass(ContractViolation, AssertionError)


def test_check_error_at_root_reads_any() -> None:
    error = CheckError("Not a number")

    assert error.path == ()
    assert error.location == "any"
    assert str(error) == "Not a number at any"


def test_frozen_dataclass_defaults_and_update() -> None:
    @FrozenDataclass()
    class Point:
        x: int
        y: int = 0

    point = Point(1)
    moved = point.update(y=5)  # type: ignore[attr-defined]

    assert moved == Point(1, 5)
    assert point.y == 0
    assert Point.__slots__ == ("x", "y")  # type: ignore[attr-defined]
    with pytest.raises(FrozenInstanceError):
        point.x = 2  # type: ignore[misc]


def test_frozen_dataclass_keeps_custom_update() -> None:
    @FrozenDataclass(slots=False)
    class Box:
        value: int

        def update(self, **changes: object) -> str:
            return "custom"

    assert Box(1).update(value=2) == "custom"
