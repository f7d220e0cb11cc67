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

"""Composable runtime schema checks with coercion and path diagnostics.

Build checkers from host values and compose them::

    from checkwise import Status, as_

    person = as_({"name": str, "age": as_.number.gte(0)})
    person.validate({"name": "Al", "age": "30"})  # {"name": "Al", "age": 30}

    status = Status()
    person.matches({"name": "Al"}, status)  # False
    status.failures  # ["age"]
"""

from __future__ import annotations

from .checker import Checker, Operation, Operations, RawCheck, hydrate, indirect
from .descriptions import (
    Composed,
    InstanceOf,
    Literal,
    Pattern,
    PrimitiveMarker,
    SchemaDescription,
    Structural,
    describe,
)
from .dispatch import Dispatcher, as_, extend
from .errors import (
    CheckError,
    CheckwiseError,
    ContractViolation,
    SchemaDescriptionError,
    UnknownCheckerError,
)
from .logging import configure_logging, get_logger
from .registry import Registry, default_registry
from .static import TYPE_WEIGHT, static_check, static_operations
from .status import DEFAULT_WEIGHT, Status
from .types import MISSING, Missing, PathSegment

__all__ = [
    "DEFAULT_WEIGHT",
    "MISSING",
    "TYPE_WEIGHT",
    "CheckError",
    "Checker",
    "CheckwiseError",
    "ContractViolation",
    "Composed",
    "Dispatcher",
    "InstanceOf",
    "Literal",
    "Missing",
    "Operation",
    "Operations",
    "PathSegment",
    "Pattern",
    "PrimitiveMarker",
    "RawCheck",
    "Registry",
    "SchemaDescription",
    "SchemaDescriptionError",
    "Status",
    "Structural",
    "UnknownCheckerError",
    "as_",
    "configure_logging",
    "default_registry",
    "describe",
    "extend",
    "get_logger",
    "hydrate",
    "indirect",
    "static_check",
    "static_operations",
]
