"""Domain primitives: scalar aliases.

Scalar aliases may be promoted to proper value objects later without changing imports.
"""

from __future__ import annotations

type VariableId = str
type PromptId = str
type VariableOptions = tuple[str, ...]
