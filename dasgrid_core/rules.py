from __future__ import annotations

from typing import Any, Callable, Iterable, Sequence

from .coords import Coord
from .errors import RuleFailed

# A rule inspects a prospective (coord, value) pair. It rejects by raising a
# GridError (usually RuleFailed) or by returning a falsy value other than
# None; returning None or anything truthy accepts.
Rule = Callable[[Coord, Any], Any]


def check_rules(rules: Iterable[Rule], coord: Coord, value: Any) -> None:
    """Runs rules left to right and stops at the first rejection."""
    for rule in rules:
        result = rule(coord, value)
        if result is not None and not result:
            raise RuleFailed(coord, value)


def forbid_values(*values: Any) -> Rule:
    """Rule rejecting any of the given values."""
    banned: Sequence[Any] = tuple(values)

    def rule(coord: Coord, value: Any) -> None:
        if value in banned:
            raise RuleFailed(coord, value)

    return rule


def require_value(expected: Any) -> Rule:
    """Rule accepting only `expected`, e.g. the empty marker of a board."""
    def rule(coord: Coord, value: Any) -> None:
        if value != expected:
            raise RuleFailed(coord, value)

    return rule
