import pytest

from oficina.exceptions import AuthError, InvalidInputError
from oficina.models import EmployeeCreate, EmployeeRole, EmployeeUpdate
from oficina.services import get_employee_service


def test_salary_creates_fixed_expense(state, painter):
    expense = state.fixed_expenses[f"salary-{painter.id}"]
    assert expense.name == "Salário - Carlos Souza"
    assert expense.monthly_cost == 4500
    assert expense.employee_id == painter.id


def test_salary_expense_follows_updates(state, painter):
    service = get_employee_service()
    service.update_employee(painter.id, EmployeeUpdate(salary=5000, name="Carlos S."))
    expense = state.fixed_expenses[f"salary-{painter.id}"]
    assert expense.monthly_cost == 5000
    assert expense.name == "Salário - Carlos S."

    service.update_employee(painter.id, EmployeeUpdate(salary=0))
    assert f"salary-{painter.id}" not in state.fixed_expenses


def test_blank_password_keeps_current(state, painter):
    updated = get_employee_service().update_employee(painter.id, EmployeeUpdate(password="", phone="11 5555"))
    assert updated.password == "1234"
    assert updated.phone == "11 5555"


def test_null_fields_keep_current_values(state, painter):
    updated = get_employee_service().update_employee(painter.id, EmployeeUpdate(role=None, salary=None))
    assert updated.role == EmployeeRole.PINTOR
    assert updated.salary == 4500
    assert state.employees[painter.id].role == EmployeeRole.PINTOR
    assert f"salary-{painter.id}" in state.fixed_expenses


def test_remove_employee_drops_salary_expense(state, painter):
    get_employee_service().remove_employee(painter.id)
    assert state.employees == {}
    assert state.fixed_expenses == {}


def test_access_id_must_be_unique(state, painter):
    with pytest.raises(InvalidInputError):
        get_employee_service().add_employee(EmployeeCreate(
            name="Outro", role=EmployeeRole.LAVADOR, employee_id="carlos", password="x",
        ))


def test_store_login(state, painter):
    service = get_employee_service()
    assert service.authenticate_store("carlos", "1234").id == painter.id
    with pytest.raises(AuthError, match="Credenciais da loja inválidas"):
        service.authenticate_store("carlos", "4321")
    with pytest.raises(AuthError):
        service.authenticate_store("ninguem", "1234")


def test_activity_lists_work_and_actions(state, car, painter, complete):
    complete(car.id, painter, comments="Desmontado sem avarias")
    activity = get_employee_service().activity(painter.id)
    assert activity[0]["source"] == "work_log"
    assert activity[0]["description"] == "Desmontado sem avarias"
    assert activity[0]["car_plate"] == "ABC1D23"
