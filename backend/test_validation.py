import pytest
from pydantic import ValidationError

from schemas import BudgetRequest, ExpenseRequest
from validation import amount_errors

EMPTY = "La cantidad no puede ir vacía"
POSITIVE = "Debe ser mayor a 0"


@pytest.mark.parametrize("value, expected", [
    (None, [EMPTY, "Cantidad no válida", POSITIVE]),
    ("  ", [EMPTY, "Cantidad no válida", POSITIVE]),
    ("abc", ["Cantidad no válida", POSITIVE]),
    ("nan", ["Cantidad no válida", POSITIVE]),
    (False, ["Cantidad no válida", POSITIVE]),
    (True, ["Cantidad no válida"]),
    (0, [POSITIVE]),
    (-1.5, [POSITIVE]),
    ("12.5", []),
    (300, []),
])
def test_amount_errors(value, expected):
    assert amount_errors(value, EMPTY, POSITIVE) == expected


def test_budget_request_reports_every_failing_rule():
    with pytest.raises(ValidationError) as exc_info:
        BudgetRequest.model_validate({})

    errors = exc_info.value.errors()
    assert [e["loc"] for e in errors] == [("name",), ("amount",), ("amount",), ("amount",)]
    assert [e["msg"] for e in errors] == [
        "El nombre del presupuesto no puede ir vacío",
        "La cantidad del presupuesto no puede ir vacía",
        "Cantidad no válida",
        "El presupuesto debe ser mayor a 0",
    ]


def test_expense_request_converts_amount():
    expense = ExpenseRequest.model_validate({"name": "Comida", "amount": "50.25"})

    assert expense.model_dump() == {"name": "Comida", "amount": 50.25}


def test_valid_name_with_bad_amount_reports_only_amount():
    with pytest.raises(ValidationError) as exc_info:
        ExpenseRequest.model_validate({"name": "Comida", "amount": -3})

    assert [e["msg"] for e in exc_info.value.errors()] == ["El gasto debe ser mayor a 0"]
