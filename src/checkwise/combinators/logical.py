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

"""Logical combinators: conjunction, disjunction and negation.

All three are anonymous and carry zero weight: they only route values to the
checkers they close over and never move the quality score themselves.
"""

from __future__ import annotations

from ..checker import Checker, Operations, hydrate
from ..logging import get_logger
from ..status import Status

__all__ = ["and_", "not_", "or_"]

logger = get_logger(__name__)


def and_(left: Checker, *descriptions: object) -> Checker:
    """Refine ``left`` with the checker described by ``descriptions``.

    ``right`` sees the *coerced* output of ``left``, making conjunction a
    sequential pipeline. ``matches`` short-circuits when ``left`` fails; the
    coercion feeding ``right`` is an ordinary invocation and is scored like
    any other. ``coerce`` and ``validate`` always run both stages.
    """

    registry = left.resolved_registry
    right = registry.resolve(*descriptions)

    def matches(value: object, status: Status) -> bool:
        return left.matches(value, status) and right.matches(
            left.coerce(value, status), status, left.name
        )

    def coerce(value: object, status: Status) -> object:
        return right.coerce(left.coerce(value, status), status, left.name)

    def validate(value: object, status: Status) -> object:
        return right.validate(left.validate(value, status), status, left.name)

    return hydrate(
        Operations(matches=matches, coerce=coerce, validate=validate),
        weight=0,
        registry=registry,
        label=f"{left.display_name} & {right.display_name}",
    )


def or_(left: Checker, *descriptions: object) -> Checker:
    """Accept values matching ``left`` or any of the described alternatives.

    Branches are tried in order, each against a forked status. The first
    branch that matches wins. When none matches, the branch with the highest
    quality score is the closest miss (earliest wins ties): its diagnostics
    are kept by ``matches`` and its coercion is applied by ``coerce`` and
    ``validate``.
    """

    registry = left.resolved_registry
    branches = (left, *(registry.resolve(description) for description in descriptions))

    def select(value: object, status: Status) -> tuple[Checker, Status, bool]:
        misses: list[tuple[Checker, Status]] = []
        for branch in branches:
            trial = status.fork()
            if branch.matches(value, trial):
                return branch, trial, True
            misses.append((branch, trial))
        best = max(misses, key=lambda miss: miss[1].quality)
        logger.debug(
            "No disjunction branch matched; using closest miss.",
            event="or.branch_selected",
            context={"branch": best[0].display_name, "quality": best[1].quality},
        )
        return best[0], best[1], False

    def matches(value: object, status: Status) -> bool:
        _, trial, matched = select(value, status)
        status.absorb(trial)
        return matched

    def coerce(value: object, status: Status) -> object:
        branch, _, _ = select(value, status)
        return branch.coerce(value, status)

    def validate(value: object, status: Status) -> object:
        branch, _, _ = select(value, status)
        return branch.validate(value, status)

    return hydrate(
        Operations(matches=matches, coerce=coerce, validate=validate),
        weight=0,
        registry=registry,
        label=" | ".join(branch.display_name for branch in branches),
    )


def not_(left: Checker, *descriptions: object) -> Checker:
    """Negate a checker.

    With no descriptions the result matches whatever ``left`` rejects and
    coerces by identity. With descriptions it matches values accepted by
    ``left`` whose coerced form is rejected by the described checker, and
    coerces through ``left``. The negated check runs against a forked status,
    so its own failures never show up as diagnostics.
    """

    registry = left.resolved_registry
    if descriptions:
        base: Checker | None = left
        excluded = registry.resolve(*descriptions)
    else:
        base, excluded = None, left
    label = f"not {excluded.display_name}"

    def rejects(value: object, status: Status) -> bool:
        return not excluded.matches(value, status.fork())

    def matches(value: object, status: Status) -> bool:
        if base is not None:
            if not base.matches(value, status):
                return False
            value = base.coerce(value, status)
        return rejects(value, status)

    def coerce(value: object, status: Status) -> object:
        return value if base is None else base.coerce(value, status)

    def validate(value: object, status: Status) -> object:
        result = value if base is None else base.validate(value, status)
        if not rejects(result, status):
            raise ValueError(f"Must be {label}")
        return result

    return hydrate(
        Operations(matches=matches, coerce=coerce, validate=validate),
        weight=0,
        registry=registry,
        label=label if base is None else f"{base.display_name} & {label}",
    )
