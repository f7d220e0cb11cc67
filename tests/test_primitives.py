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

"""Tests for the primitive type checkers."""

from __future__ import annotations

from datetime import UTC, date, datetime
from decimal import Decimal

import pytest

from checkwise import MISSING, TYPE_WEIGHT, CheckError, Checker, Status, as_

pytestmark = pytest.mark.core


def test_string_coercion() -> None:
    assert as_.string.coerce(123) == "123"
    assert as_.string.coerce(None) == ""
    assert as_.string.coerce(MISSING) == ""
    assert as_.string.coerce("x") == "x"


@pytest.mark.parametrize(
    ("value", "expected"),
    [("a", True), ("", True), (1, False), (None, False), (b"a", False)],
)
def test_string_matches(value: object, expected: bool) -> None:
    assert as_.string.matches(value) is expected


@pytest.mark.parametrize(
    ("value", "expected"),
    [(1, True), (1.5, True), (True, False), ("1", False), (None, False)],
)
def test_number_matches(value: object, expected: bool) -> None:
    assert as_.number.matches(value) is expected


def test_number_coercion() -> None:
    assert as_.number.coerce("30") == 30
    assert as_.number.coerce(" 2.5 ") == 2.5
    assert as_.number.coerce(True) == 1
    assert as_.number.coerce(None) == 0
    assert as_.number.coerce(7) == 7
    assert as_.number.coerce(MISSING) is MISSING


def test_null_number_field_coerces_to_zero() -> None:
    assert as_({"age": int}).coerce({"age": None}) == {"age": 0}


def test_number_validate_rejects_unparseable_strings() -> None:
    with pytest.raises(CheckError) as excinfo:
        as_.number.validate("abc")

    assert excinfo.value.reason == "Cannot interpret 'abc' as number"
    assert str(excinfo.value) == "Cannot interpret 'abc' as number at any"


def test_number_validate_rejects_missing_values() -> None:
    with pytest.raises(CheckError, match="Not a number"):
        as_.number.validate(MISSING)


def test_boolean_coercion() -> None:
    assert as_.boolean.coerce("yes") is True
    assert as_.boolean.coerce(" Off ") is False
    assert as_.boolean.coerce(0) is False
    assert as_.boolean.coerce([1]) is True
    assert as_.boolean.matches(False)
    assert not as_.boolean.matches(0)

    with pytest.raises(CheckError, match="Cannot interpret 'maybe' as boolean"):
        as_.boolean.validate("maybe")


def test_date_coercion() -> None:
    assert as_.date.matches(date(2024, 1, 2))
    assert as_.date.matches(datetime(2024, 1, 2, 3, 4))
    assert not as_.date.matches("2024-01-02")
    assert as_.date.coerce("2024-01-02") == datetime(2024, 1, 2)
    assert as_.date.coerce(0) == datetime(1970, 1, 1, tzinfo=UTC)

    with pytest.raises(CheckError):
        as_.date.validate("yesterday")


def test_object_coercion() -> None:
    payload = {"a": 1}

    assert as_.object.matches(payload)
    assert not as_.object.matches([("a", 1)])
    assert as_.object.coerce(payload) is payload
    assert as_.object.coerce(None) == {}
    assert as_.object.coerce([("a", 1)]) == {"a": 1}


def test_array_coercion() -> None:
    items = [1, 2]

    assert as_.array.matches(items)
    assert as_.array.matches((1, 2))
    assert not as_.array.matches("12")
    assert as_.array.coerce(items) is items
    assert as_.array.coerce((1, 2)) == [1, 2]
    assert as_.array.coerce(3) == [3]
    assert as_.array.coerce(MISSING) == []


def test_json_coercion() -> None:
    assert as_.json.matches('{"a": 1}')
    assert not as_.json.matches("nope")
    assert not as_.json.matches({"a": 1})
    assert as_.json.coerce({"a": 1}) == '{"a": 1}'
    assert as_.json.coerce("[1]") == "[1]"
    assert as_.json.coerce("nope") == '"nope"'


def test_error_matches_only_absent_values() -> None:
    assert as_.error.matches(MISSING)
    assert not as_.error.matches(None)
    assert as_.error.coerce("secret") is MISSING
    assert as_.error.validate("secret") is MISSING
    assert as_.error.weight == 1


def test_function_checks_callables() -> None:
    function = as_.function()

    assert function.matches(len)
    assert not function.matches(1)
    assert function.coerce(len) is len
    assert function.coerce(5)() == 5
    assert function.coerce(5)("ignored", key="ignored") == 5


def test_function_arity() -> None:
    binary = as_.function(2)

    assert binary.matches(lambda a, b: None)
    assert binary.matches(lambda *args: None)
    assert not binary.matches(lambda a: None)
    assert repr(binary) == "Checker(function(2))"


def test_instanceof_checks_and_constructs() -> None:
    decimal = as_.instanceof(Decimal)

    assert decimal.matches(Decimal("1.5"))
    assert not decimal.matches(1.5)
    assert decimal.coerce("1.5") == Decimal("1.5")

    with pytest.raises(TypeError, match="expects a class"):
        as_.instanceof("Decimal")


def test_absent_json_and_instance_fields_are_dropped_on_coerce() -> None:
    checker = as_({"data": as_.json, "amount": as_.instanceof(Decimal)})

    assert as_.json.coerce(MISSING) is MISSING
    assert as_.instanceof(Decimal).coerce(MISSING) is MISSING
    assert checker.coerce({}) == {}


@pytest.mark.parametrize(
    ("checker", "reason"),
    [
        (as_({"field": as_.json}), "Not JSON"),
        (as_({"field": as_.instanceof(Decimal)}), "Not an instance of Decimal"),
    ],
)
def test_absent_fields_fail_validate_with_the_type_message(
    checker: Checker, reason: str
) -> None:
    with pytest.raises(CheckError) as excinfo:
        checker.validate({})

    assert excinfo.value.reason == reason
    assert excinfo.value.path == ("field",)


def test_type_checks_weigh_less_than_value_checks(status: Status) -> None:
    as_.string.matches("a", status)
    assert status.quality == TYPE_WEIGHT

    as_.eq("a").matches("a", status)
    assert status.quality == TYPE_WEIGHT + 1


def test_primitives_are_anonymous_in_paths(status: Status) -> None:
    as_.number.matches("x", status, "age")

    assert status.failures == ["age"]
