import pytest
from fastapi import HTTPException
from fastapi.exceptions import RequestValidationError

from guards import ensure_access, ensure_exists, parse_id


@pytest.mark.parametrize("value, expected", [("1", 1), ("4000", 4000), ("007", 7)])
def test_parse_id_accepts_positive_integers(value, expected):
    assert parse_id(value, "budget_id") == expected


@pytest.mark.parametrize("value", ["", "0", "-3", "abc", "1e3", " 1", "²", "2147483648"])
def test_parse_id_rejects_everything_else(value):
    with pytest.raises(RequestValidationError) as exc_info:
        parse_id(value, "budget_id")

    errors = exc_info.value.errors()
    assert len(errors) == 1
    assert errors[0]["msg"] == "ID no válido"
    assert errors[0]["loc"] == ("path", "budget_id")


def test_ensure_exists_returns_the_row():
    row = object()
    assert ensure_exists("budget", row) is row


@pytest.mark.parametrize("resource, message", [
    ("budget", "Presupuesto no encontrado"),
    ("expense", "Gasto no encontrado"),
])
def test_ensure_exists_reports_missing_rows(resource, message):
    with pytest.raises(HTTPException) as exc_info:
        ensure_exists(resource, None)

    assert exc_info.value.status_code == 404
    assert exc_info.value.detail == message


def test_ensure_access_allows_the_owner():
    ensure_access("budget", 1, 1)
    ensure_access("expense", 5, 5)


@pytest.mark.parametrize("resource, status_code", [("budget", 401), ("expense", 403)])
def test_ensure_access_status_depends_on_resource(resource, status_code):
    with pytest.raises(HTTPException) as exc_info:
        ensure_access(resource, 1, 2)

    assert exc_info.value.status_code == status_code
    assert exc_info.value.detail == "Acción no válida"
