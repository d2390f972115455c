"""Upstream checks for desired variable lists.

The reconciliation engine accepts whatever it is given; these rules are applied
by callers before reconciling so that colliding names never reach storage.
"""

from __future__ import annotations

import re
from collections import Counter
from typing import TYPE_CHECKING, Final

from varsync.domain.errors import VariableValidationError
from varsync.domain.model import VariableType

if TYPE_CHECKING:
    from collections.abc import Sequence

    from varsync.domain.model import DesiredVariable

VARIABLE_NAME_PATTERN: Final[re.Pattern[str]] = re.compile(r"^[a-zA-Z0-9_]+$")

MAX_VARIABLE_COUNT: Final[int] = 50
NAME_MAX_LENGTH: Final[int] = 100
HELP_MAX_LENGTH: Final[int] = 500
DEFAULT_VALUE_MAX_LENGTH: Final[int] = 1000
PATTERN_MAX_LENGTH: Final[int] = 200
OPTIONS_MAX_COUNT: Final[int] = 50
OPTION_MAX_LENGTH: Final[int] = 100


def validate_desired_variables(variables: Sequence[DesiredVariable]) -> None:
    """Raise ``VariableValidationError`` listing every rule ``variables`` breaks."""

    violations = collect_violations(variables)
    if violations:
        raise VariableValidationError(violations)


def collect_violations(variables: Sequence[DesiredVariable]) -> list[str]:
    violations: list[str] = []
    if len(variables) > MAX_VARIABLE_COUNT:
        violations.append(
            f"too many variables: {len(variables)} (maximum {MAX_VARIABLE_COUNT})"
        )

    for position, variable in enumerate(variables):
        label = f"variable #{position} ({variable.name!r})"
        violations.extend(f"{label}: {problem}" for problem in _variable_problems(variable))

    name_counts = Counter(variable.name for variable in variables)
    violations.extend(
        f"duplicate variable name {name!r}" for name, count in name_counts.items() if count > 1
    )
    id_counts = Counter(variable.id for variable in variables if variable.id is not None)
    violations.extend(
        f"duplicate variable id {variable_id!r}"
        for variable_id, count in id_counts.items()
        if count > 1
    )
    return violations


def _variable_problems(variable: DesiredVariable) -> list[str]:
    problems: list[str] = []
    name = variable.name
    if not name:
        problems.append("name is empty")
    elif len(name) > NAME_MAX_LENGTH:
        problems.append(f"name longer than {NAME_MAX_LENGTH} characters")
    elif not VARIABLE_NAME_PATTERN.match(name):
        problems.append("name may only contain letters, digits and underscores")

    if variable.help is not None and len(variable.help) > HELP_MAX_LENGTH:
        problems.append(f"help longer than {HELP_MAX_LENGTH} characters")
    if (
        variable.default_value is not None
        and len(variable.default_value) > DEFAULT_VALUE_MAX_LENGTH
    ):
        problems.append(f"default value longer than {DEFAULT_VALUE_MAX_LENGTH} characters")

    if variable.pattern is not None:
        if len(variable.pattern) > PATTERN_MAX_LENGTH:
            problems.append(f"pattern longer than {PATTERN_MAX_LENGTH} characters")
        else:
            try:
                re.compile(variable.pattern)
            except re.error as exc:
                problems.append(f"pattern is not a valid regular expression ({exc})")

    options = variable.options or ()
    if variable.type is VariableType.ENUM and not options:
        problems.append("ENUM variables need at least one option")
    if len(options) > OPTIONS_MAX_COUNT:
        problems.append(f"more than {OPTIONS_MAX_COUNT} options")
    problems.extend(
        f"option starting {option[:20]!r} longer than {OPTION_MAX_LENGTH} characters"
        for option in options
        if len(option) > OPTION_MAX_LENGTH
    )
    return problems
