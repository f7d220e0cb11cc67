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

"""Tests for the diagnostic status tracker."""

from __future__ import annotations

import pytest

from checkwise import Status
from checkwise.errors import ANY_PATH

pytestmark = pytest.mark.core


def test_new_status_is_empty(status: Status) -> None:
    assert status.path == []
    assert status.quality == 0.0
    assert status.failures == []
    assert status.succeeded
    assert status.joined_path() == ANY_PATH


def test_push_adds_segments_before_name(status: Status) -> None:
    pushed = status.push("field", ["items", 2])

    assert pushed == 3
    assert status.path == ["items", "2", "field"]
    assert status.joined_path() == "items.2.field"


def test_push_drops_none_and_empty_segments(status: Status) -> None:
    pushed = status.push(None, [None, "", "a"])

    assert pushed == 1
    assert status.path == ["a"]


def test_pop_removes_exactly_what_was_pushed(status: Status) -> None:
    outer = status.push("outer")
    inner = status.push("inner", ["x"])

    status.pop(inner)
    assert status.path == ["outer"]

    status.pop(outer)
    assert status.path == []
    assert status.depth == 0


def test_pop_of_zero_is_a_no_op(status: Status) -> None:
    status.push("a")
    status.pop(0)

    assert status.path == ["a"]


def test_pop_beyond_depth_violates_precondition(status: Status) -> None:
    status.push("a")

    with pytest.raises(AssertionError, match="cannot pop 2"):
        status.pop(2)


def test_record_success_adds_weight(status: Status) -> None:
    location = status.record(True, 0.5)

    assert location == ANY_PATH
    assert status.quality == 0.5
    assert status.failures == []


def test_record_failure_subtracts_weight_and_records_path(status: Status) -> None:
    status.push("age")
    location = status.record(False, 2)

    assert location == "age"
    assert status.quality == -2
    assert status.failures == ["age"]
    assert not status.succeeded


def test_root_failure_is_reported_as_any(status: Status) -> None:
    status.record(False)

    assert status.failures == [ANY_PATH]


def test_ancestor_failures_are_skipped(status: Status) -> None:
    status.push("a")
    status.push("b")
    status.record(False)
    status.pop(1)
    status.record(False)
    status.pop(1)
    status.record(False)

    assert status.failures == ["a.b"]


def test_sibling_failures_are_all_kept(status: Status) -> None:
    for name in ("name", "age"):
        count = status.push(name)
        status.record(False)
        status.pop(count)

    assert status.failures == ["name", "age"]


def test_sibling_sharing_a_name_prefix_is_kept(status: Status) -> None:
    for name in ("ab", "a"):
        count = status.push(name)
        status.record(False)
        status.pop(count)

    assert status.failures == ["ab", "a"]


def test_repeated_failure_is_recorded_once(status: Status) -> None:
    status.push("a")
    status.record(False)
    status.record(False)

    assert status.failures == ["a"]
    assert status.quality == -2


def test_root_failure_only_covers_the_root(status: Status) -> None:
    status.record(False)
    status.push("child")
    status.record(False)

    assert status.failures == [ANY_PATH, "child"]


def test_fork_starts_at_current_path_with_fresh_diagnostics(status: Status) -> None:
    status.push("a")
    status.record(False)

    fork = status.fork()
    fork.push("b")

    assert fork.path == ["a", "b"]
    assert fork.quality == 0.0
    assert fork.failures == []
    assert status.path == ["a"]


def test_absorb_merges_quality_and_failures(status: Status) -> None:
    status.push("a")
    status.record(True)
    fork = status.fork()
    fork.push("b")
    fork.record(False, 0.5)
    fork.pop(1)
    fork.record(False, 0)

    status.absorb(fork)

    assert status.quality == 0.5
    assert status.failures == ["a.b"]


def test_absorb_translates_root_failures(status: Status) -> None:
    fork = status.fork()
    fork.record(False)

    status.absorb(fork)
    status.absorb(fork)

    assert status.failures == [ANY_PATH]
    assert status.quality == -2


def test_invariant_rejects_duplicate_failures(status: Status) -> None:
    status.failures.extend(["a", "a"])

    with pytest.raises(AssertionError, match="_failures_are_unique"):
        status.push("b")


def test_repr_shows_state(status: Status) -> None:
    status.push("a")

    assert repr(status) == "Status(path=['a'], quality=0.0, failures=[])"
