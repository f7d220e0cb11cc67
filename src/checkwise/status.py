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

"""Per-call diagnostic accumulator shared by every checker in one walk.

A :class:`Status` tracks three things while a checker tree is evaluated:

``path``
    Stack of path segments for the node currently being checked. Checkers push
    on entry and pop exactly the same number of segments on exit.

``quality``
    Running weighted score. Each checker invocation adds its weight on success
    and subtracts it on failure.

``failures``
    Ordered, duplicate-free list of dotted paths where a check failed. Failures
    are recorded while the path unwinds (deepest first); a path that is a
    prefix of an already recorded failure is skipped, so a failing parent never
    repeats what its failing child already reported.

Pass a fresh instance to any checker operation to inspect what happened::

    status = Status()
    as_({"age": int}).matches({"age": "x"}, status)
    status.failures  # ["age"]

A :class:`Status` is not thread-safe; keep each instance confined to a single
call chain.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import override

from .dbc import ensure, invariant, require
from .errors import ANY_PATH, join_path
from .types import PathSegment

__all__ = ["DEFAULT_WEIGHT", "Status"]

DEFAULT_WEIGHT = 1.0


def _failures_are_unique(status: Status) -> bool:
    return len(set(status.failures)) == len(status.failures)


def _segments_are_strings(status: Status) -> bool:
    return all(isinstance(segment, str) and segment for segment in status.path)


def _returns_display_path(
    status: Status,
    success: bool,  # noqa: FBT001
    weight: float = DEFAULT_WEIGHT,
    *,
    result: str | None = None,
    exception: BaseException | None = None,
) -> bool:
    return exception is not None or bool(result)


def _pop_within_depth(status: Status, count: int) -> tuple[bool, str]:
    return (
        0 <= count <= len(status.path),
        f"cannot pop {count} segment(s) from a path of depth {len(status.path)}",
    )


@invariant(_failures_are_unique, _segments_are_strings)
class Status:
    """Mutable diagnostic state for a single top-level check."""

    def __init__(self, path: Iterable[str] = ()) -> None:
        self.path: list[str] = list(path)
        self.quality: float = 0.0
        self.failures: list[str] = []

    @override
    def __repr__(self) -> str:
        return (
            f"Status(path={self.path!r}, quality={self.quality!r}, "
            f"failures={self.failures!r})"
        )

    @property
    def succeeded(self) -> bool:
        """``True`` while no failure has been recorded."""

        return not self.failures

    @property
    def depth(self) -> int:
        return len(self.path)

    def joined_path(self) -> str:
        """Return the current path in dotted form (``"any"`` at the root)."""

        return join_path(self.path)

    def push(self, name: str | None, segments: Iterable[PathSegment] = ()) -> int:
        """Push ``segments`` followed by ``name`` and return how many were pushed.

        Segments are converted to strings; ``None`` and empty strings are dropped.
        The return value must be handed back to :meth:`pop`.
        """

        pushed = [
            str(segment)
            for segment in (*segments, name)
            if segment is not None and str(segment)
        ]
        self.path.extend(pushed)
        return len(pushed)

    @require(_pop_within_depth)
    def pop(self, count: int) -> None:
        """Remove exactly ``count`` segments from the end of the path."""

        if count:
            del self.path[-count:]

    @ensure(_returns_display_path)
    def record(self, success: bool, weight: float = DEFAULT_WEIGHT) -> str:  # noqa: FBT001
        """Record the outcome of one checker invocation at the current path.

        Returns the dotted path (``"any"`` at the root), which is also used to
        annotate hard failures.
        """

        path = ".".join(self.path)
        if success:
            self.quality += weight
        else:
            self.quality -= weight
            self._add_failure(path)
        return path or ANY_PATH

    def fork(self) -> Status:
        """Return a scratch status positioned at the current path.

        Combinators that need to try a branch without committing its
        diagnostics evaluate it against a fork and :meth:`absorb` the one they
        keep.
        """

        return Status(self.path)

    def absorb(self, other: Status) -> None:
        """Merge the quality and failures accumulated by a forked status."""

        self.quality += other.quality
        for failure in other.failures:
            self._add_failure("" if failure == ANY_PATH else failure)

    def _add_failure(self, path: str) -> None:
        if any(_covers(recorded, path) for recorded in self.failures):
            return
        self.failures.append(path or ANY_PATH)


def _covers(recorded: str, path: str) -> bool:
    # The root is covered by any recorded failure; "any" only covers the root.
    # Otherwise ``path`` must be ``recorded`` itself or one of its ancestors,
    # compared segment by segment so that "a" does not cover "ab".
    if not path:
        return True
    if recorded == ANY_PATH:
        return False
    return recorded == path or recorded.startswith(f"{path}.")
