"""Placeholder detection and preview rendering for prompt content."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from varsync.domain.model import DesiredVariable, PersistedVariable

PLACEHOLDER_PATTERN: Final[re.Pattern[str]] = re.compile(r"\{\{(\w+)\}\}", re.ASCII)


def detect_variable_names(content: str) -> list[str]:
    """Return placeholder names in order of first appearance, without repeats."""

    return list(dict.fromkeys(PLACEHOLDER_PATTERN.findall(content)))


def missing_variables(
    content: str,
    variables: Iterable[DesiredVariable | PersistedVariable],
) -> list[str]:
    defined = {variable.name for variable in variables}
    return [name for name in detect_variable_names(content) if name not in defined]


def render_preview(
    content: str,
    variables: Iterable[DesiredVariable | PersistedVariable],
    values: Mapping[str, str],
) -> str:
    """Substitute known placeholders; unknown or empty ones are left as written.

    A supplied value wins over the variable's default value.
    """

    replacements: dict[str, str] = {}
    for variable in variables:
        replacement = values.get(variable.name) or variable.default_value
        if replacement:
            replacements[variable.name] = replacement

    def _substitute(match: re.Match[str]) -> str:
        return replacements.get(match.group(1), match.group(0))

    return PLACEHOLDER_PATTERN.sub(_substitute, content)
