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

"""Built-in combinator and leaf tables.

Combinators
-----------
Called with the receiving checker first: ``combinator(left, *args)``.

- ``and_``: sequential refinement (``a & b``)
- ``or_``: first matching alternative (``a | b``)
- ``not_``: negation (``~a``)
- ``with_``: field / item shape
- ``size``: ``len()`` constraint
- ``named``: path segment override

Leaves
------
Called with the owning registry first: ``leaf(registry, *args)``. As methods
on a checker they are conjoined with it (``as_.number.gte(0)``).

- ``regexp``: pattern search on strings
- ``eq``: equality, coercing to the expected value
- ``lt``, ``lte``, ``gt``, ``gte``: ordering against a bound
- ``function``: callables, optionally with an arity
- ``instanceof``: ``isinstance`` checks
"""

from __future__ import annotations

from collections.abc import Callable, Mapping

from ..checker import Checker
from ..primitives import function, instanceof
from .leaves import eq, gt, gte, lt, lte, regexp
from .logical import and_, not_, or_
from .structural import named, size, with_

__all__ = [
    "COMBINATORS",
    "LEAVES",
    "Combinator",
    "Leaf",
    "and_",
    "eq",
    "gt",
    "gte",
    "lt",
    "lte",
    "named",
    "not_",
    "or_",
    "regexp",
    "size",
    "with_",
]

type Combinator = Callable[..., Checker]
"""``(left, *args) -> Checker``."""

type Leaf = Callable[..., Checker]
"""``(registry, *args) -> Checker``."""

COMBINATORS: Mapping[str, Combinator] = {
    "and_": and_,
    "or_": or_,
    "not_": not_,
    "with_": with_,
    "size": size,
    "named": named,
}

LEAVES: Mapping[str, Leaf] = {
    "regexp": regexp,
    "eq": eq,
    "lt": lt,
    "lte": lte,
    "gt": gt,
    "gte": gte,
    "function": function,
    "instanceof": instanceof,
}
