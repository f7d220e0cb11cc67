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

"""Base exception hierarchy for :mod:`checkwise`."""

from __future__ import annotations

from collections.abc import Sequence

ANY_PATH = "any"
"""Display token used when a failure happens at the root of a check."""


def join_path(path: Sequence[str]) -> str:
    """Return the dotted form of ``path`` (``"any"`` when empty)."""

    return ".".join(path) or ANY_PATH


class CheckwiseError(Exception):
    """Base class for all checkwise exceptions.

    This class serves as the root of the exception hierarchy, allowing callers
    to catch all library-specific exceptions with a single handler while letting
    standard Python exceptions propagate normally.

    Note:
        Subclasses also inherit from standard exception types (e.g.,
        ``ValueError``, ``TypeError``) to enable more specific handling
        when needed.
    """


class CheckError(CheckwiseError, ValueError):
    """Raised when a checker operation fails hard.

    Hard failures are exceptions raised by a predicate, a coercion or a
    structural recursion (for example a string that cannot be read as a
    number during ``validate``). The checker that first sees the exception
    wraps it into a :class:`CheckError` carrying the diagnostic path of the
    failing node; the original exception is kept as ``__cause__``. Checkers
    further up the tree re-raise the same :class:`CheckError` unchanged.

    Example:
        Reporting the failing location::

            try:
                as_({"age": int}).validate({"age": "old"})
            except CheckError as e:
                print(e.path)    # ("age",)
                print(e.reason)  # "Cannot interpret 'old' as number"
                print(e)         # "Cannot interpret 'old' as number at age"

    Attributes:
        reason: Message of the original failure.
        path: Path segments locating the failing node.
    """

    def __init__(self, reason: str, *, path: Sequence[str] = ()) -> None:
        self.reason = reason
        self.path = tuple(path)
        super().__init__(f"{reason} at {join_path(self.path)}")

    @property
    def location(self) -> str:
        """Dotted path of the failing node."""

        return join_path(self.path)


class SchemaDescriptionError(CheckwiseError, TypeError):
    """Raised when a schema description cannot be turned into a checker.

    Common causes:
        - A ``with_`` template that is neither a mapping nor a sequence
        - A ``size`` or ``regexp`` argument of the wrong type
    """


class UnknownCheckerError(CheckwiseError, AttributeError):
    """Raised when a registry has no combinator, leaf or type of that name.

    Inherits from ``AttributeError`` so that ``getattr(checker, name, default)``
    and ``hasattr`` keep working on checkers and dispatchers.
    """


class ContractViolation(CheckwiseError, AssertionError):
    """Raised when a design-by-contract check fails.

    Checkers propagate it as is: no failure is recorded and it is never
    wrapped into a :class:`CheckError`. Any other ``AssertionError`` raised by
    a predicate or coercion is treated like an ordinary hard failure.

    Attributes:
        kind: Contract kind (``require``, ``ensure``, ``invariant`` or ``pure``).
        target: Qualified name of the guarded callable.
    """

    def __init__(self, message: str, *, kind: str, target: str) -> None:
        self.kind = kind
        self.target = target
        super().__init__(message)


__all__ = [
    "ANY_PATH",
    "CheckError",
    "CheckwiseError",
    "ContractViolation",
    "SchemaDescriptionError",
    "UnknownCheckerError",
    "join_path",
]
