from __future__ import annotations

from tests.support.variables import persisted
from varsync.domain.mappers import to_desired, to_desired_list
from varsync.domain.model import VariableType


def test_to_desired_drops_identity_by_default() -> None:
    row = persisted(
        "v1",
        "tone",
        variable_type=VariableType.ENUM,
        required=True,
        default_value="formal",
        options=["formal", "casual"],
    )

    variable = to_desired(row)

    assert variable.id is None
    assert variable.name == "tone"
    assert variable.type is VariableType.ENUM
    assert variable.required is True
    assert variable.default_value == "formal"
    assert variable.options == ("formal", "casual")


def test_to_desired_list_keeps_ids_and_sorts_by_order() -> None:
    rows = [persisted("v2", "second", order_index=1), persisted("v1", "first", order_index=0)]

    variables = to_desired_list(rows, keep_id=True)

    assert [(variable.id, variable.name) for variable in variables] == [
        ("v1", "first"),
        ("v2", "second"),
    ]
