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

"""Tests for schema description resolution and the ``as_`` dispatcher."""

from __future__ import annotations

import json
import re
from datetime import date, datetime
from decimal import Decimal
from typing import Any

import pytest

from checkwise import (
    Composed,
    Dispatcher,
    InstanceOf,
    Literal,
    Pattern,
    PrimitiveMarker,
    Structural,
    UnknownCheckerError,
    as_,
    default_registry,
    describe,
)

pytestmark = pytest.mark.core


@pytest.mark.parametrize(
    ("marker", "name"),
    [
        (str, "string"),
        (int, "number"),
        (float, "number"),
        (bool, "boolean"),
        (dict, "object"),
        (list, "array"),
        (tuple, "array"),
        (datetime, "date"),
        (date, "date"),
        (json, "json"),
        (callable, "function"),
        (Exception, "error"),
        (object, "any"),
        (Any, "any"),
    ],
)
def test_host_markers_describe_primitives(marker: object, name: str) -> None:
    assert describe(marker) == PrimitiveMarker(name)


def test_describe_other_values() -> None:
    pattern = re.compile("a")
    template = {"a": int}

    assert describe(as_.string) == Composed(as_.string)
    assert describe(Decimal) == InstanceOf(Decimal)
    assert describe(pattern) == Pattern(pattern)
    assert isinstance(describe(template), Structural)
    assert isinstance(describe([int]), Structural)
    assert isinstance(describe(3), Literal)
    assert isinstance(describe("str"), Literal)


def test_markers_are_compared_by_identity() -> None:
    described = describe(1)

    assert isinstance(described, Literal)
    assert described.value == 1
    assert isinstance(describe(True), Literal)


def test_variants_pass_through_describe() -> None:
    literal = Literal(str)

    assert describe(literal) is literal
    assert as_(literal).matches(str)
    assert not as_(literal).matches("a")


def test_no_description_yields_universal_checker() -> None:
    universal = as_()
    payload = object()

    assert universal is default_registry().universal
    assert universal.matches(payload)
    assert universal.coerce(payload) is payload
    assert as_(object) is universal
    assert as_(Any) is universal


def test_dispatcher_behaves_as_universal_checker() -> None:
    payload = ["x"]

    assert as_.matches(payload)
    assert as_.coerce(payload) is payload
    assert as_.validate(payload) is payload


def test_several_descriptions_are_alternatives() -> None:
    either = as_(str, int)

    assert either.matches("a")
    assert either.matches(1)
    assert not either.matches(None)


def test_checker_descriptions_are_returned_as_is() -> None:
    checker = as_.number.gte(0)

    assert as_(checker) is checker


def test_host_classes_resolve_to_registry_checkers() -> None:
    assert as_(str) is as_.string
    assert as_(int) is as_(float) is as_.number
    assert as_(callable).matches(len)
    assert as_(Decimal).matches(Decimal(1))
    assert as_(date).matches(date.today())


def test_primitive_types_are_shared_per_registry() -> None:
    assert as_.string is as_.string
    assert as_.string.registry is as_.registry


def test_leaves_are_factories_on_the_dispatcher() -> None:
    assert as_.gte(1).matches(2)
    assert as_.eq("x").matches("x")


def test_unknown_names_raise_attribute_errors() -> None:
    with pytest.raises(UnknownCheckerError, match="no checker 'nope'"):
        as_.nope  # noqa: B018
    assert not hasattr(as_, "nope")
    with pytest.raises(UnknownCheckerError, match="Unknown primitive"):
        as_(PrimitiveMarker("nope"))


def test_dispatchers_wrap_registries() -> None:
    registry = default_registry()
    dispatcher = Dispatcher(registry)

    assert dispatcher.registry is registry
    assert Dispatcher().registry is registry
    assert repr(dispatcher).startswith("Dispatcher(Registry(")
