from __future__ import annotations

import pytest
from pydantic import ValidationError

from tests.support.variables import persisted
from varsync.domain.model import VariableType
from varsync.ui.schema import VariableDocument, VariablePayload, dump_variables


def test_document_accepts_bare_list() -> None:
    document = VariableDocument.model_validate([{"name": "topic"}, {"name": "tone"}])

    assert [variable.name for variable in document.to_domain()] == ["topic", "tone"]


def test_document_accepts_wrapped_list_and_ignores_extra_keys() -> None:
    document = VariableDocument.model_validate(
        {"promptId": "p-1", "variables": [{"name": "topic", "color": "red"}]}
    )

    assert [variable.name for variable in document.to_domain()] == ["topic"]


def test_payload_accepts_camel_and_snake_case() -> None:
    camel = VariablePayload.model_validate({"name": "a", "defaultValue": "x", "orderIndex": 3})
    snake = VariablePayload.model_validate({"name": "a", "default_value": "x", "order_index": 3})

    assert camel.default_value == snake.default_value == "x"
    assert camel.order_index == snake.order_index == 3


def test_payload_normalizes_type_and_blank_fields() -> None:
    payload = VariablePayload.model_validate(
        {"id": "  ", "name": "tone", "type": "enum", "options": ["calm"], "help": ""}
    )

    variable = payload.to_domain()

    assert variable.id is None
    assert variable.type is VariableType.ENUM
    assert variable.options == ("calm",)
    assert variable.help is None


def test_payload_defaults_missing_type_to_string() -> None:
    variable = VariablePayload.model_validate({"name": "topic", "type": None}).to_domain()

    assert variable.type is VariableType.STRING
    assert variable.required is False


def test_payload_rejects_unknown_type() -> None:
    with pytest.raises(ValidationError):
        VariablePayload.model_validate({"name": "topic", "type": "colour"})


def test_dump_variables_uses_aliases() -> None:
    dumped = dump_variables(
        [persisted("v1", "tone", order_index=2, variable_type=VariableType.ENUM, options=["a"])]
    )

    assert dumped == [
        {
            "id": "v1",
            "name": "tone",
            "type": "ENUM",
            "required": False,
            "defaultValue": None,
            "help": None,
            "pattern": None,
            "options": ["a"],
            "orderIndex": 2,
        }
    ]
