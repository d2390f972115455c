"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class VariableType(StrEnum):
    """Value kinds a prompt variable can hold."""

    STRING = "STRING"
    NUMBER = "NUMBER"
    BOOLEAN = "BOOLEAN"
    ENUM = "ENUM"
    DATE = "DATE"
    MULTISTRING = "MULTISTRING"
