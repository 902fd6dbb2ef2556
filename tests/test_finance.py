from datetime import date, datetime, timedelta

import pytest

from oficina.exceptions import InvalidInputError, InvalidTransitionError
from oficina.models import (
    AuditAction, FixedExpenseCreate, MovementDirection, MovementReason, PaymentType, Period, RecordKind,
)
from oficina.services import get_finance_service, get_payroll_service, get_stock_ledger

FULL_PIPELINE = [{}, {}, {}, {}, {}, {}]


@pytest.fixture
def finished_car(state, car, painter, complete):
    for data in FULL_PIPELINE:
        complete(car.id, painter, data)
    return state.cars[car.id]


def test_monthly_summary(state, stock, finished_car, painter):
    finance = get_finance_service()
    get_stock_ledger().apply_movement(stock["Lixa 80"].id, MovementDirection.SAIDA, 4, MovementReason.PERDA)
    finance.add_fixed_expense(FixedExpenseCreate(name="Aluguel", monthly_cost=2000))
    finance.add_fixed_expense(FixedExpenseCreate(
        name="Compressor", monthly_cost=900, is_one_time_purchase=True, purchase_date=date.today(),
    ))
    finance.add_fixed_expense(FixedExpenseCreate(
        name="Lixadeira", monthly_cost=400, is_one_time_purchase=True,
        purchase_date=date.today() - timedelta(days=400),
    ))
    get_payroll_service().record_payment(painter.id, PaymentType.VALE, 1000)

    summary = finance.monthly_summary()

    assert summary.completed_cars == 1
    assert summary.revenue == 2500
    assert summary.material_costs == pytest.approx(10.0)
    assert summary.fixed_costs == 2000
    assert summary.one_time_purchases == 900
    assert summary.salaries_paid == 1000
    assert summary.expenses == pytest.approx(3910.0)
    assert summary.profit == pytest.approx(2500 - 3910.0)
    assert summary.weekly_completions[-1].count == 1
    assert [w.label for w in summary.weekly_completions][-1] == "Esta semana"


def test_clamped_exit_is_valued_at_applied_quantity(state, stock):
    get_stock_ledger().apply_movement(stock["Primer PU"].id, MovementDirection.SAIDA, 15, MovementReason.PERDA)
    assert get_finance_service().monthly_summary().material_costs == pytest.approx(800.0)


def test_salary_expenses_are_not_counted_as_fixed_costs(state, painter):
    summary = get_finance_service().monthly_summary()
    assert summary.fixed_costs == 0
    assert get_finance_service().expenses_summary().potential_fixed_cost == 4500


def test_fixed_expense_validation(state):
    finance = get_finance_service()
    with pytest.raises(InvalidInputError):
        finance.add_fixed_expense(FixedExpenseCreate(name="", monthly_cost=10))
    with pytest.raises(InvalidInputError):
        finance.add_fixed_expense(FixedExpenseCreate(name="Luz", monthly_cost=0))


def test_salary_expense_cannot_be_removed_directly(state, painter):
    with pytest.raises(InvalidInputError):
        get_finance_service().remove_fixed_expense(f"salary-{painter.id}")


def test_invoice_only_for_completed_cars(state, car):
    with pytest.raises(InvalidTransitionError):
        get_finance_service().issue_invoice(car.id)


def test_issue_invoice(state, finished_car):
    invoice = get_finance_service().issue_invoice(finished_car.id)
    assert invoice.total_value == 2500
    assert invoice.customer_name == "Ana Lima"
    assert invoice.type == "income"
    assert state.audit_log[0].action == AuditAction.INVOICE_ISSUED


def test_car_is_invoiced_once(state, finished_car):
    finance = get_finance_service()
    finance.issue_invoice(finished_car.id)
    with pytest.raises(InvalidTransitionError):
        finance.issue_invoice(finished_car.id)
    assert len(state.invoices) == 1


def test_financial_records_filters(state, finished_car, painter):
    finance = get_finance_service()
    finance.issue_invoice(finished_car.id)
    get_payroll_service().record_payment(painter.id, PaymentType.VALE, 500)

    incomes = finance.financial_records(RecordKind.INCOME, Period.TODAY)
    expenses = finance.financial_records(RecordKind.EXPENSE, Period.MONTH)
    assert [r.value for r in incomes] == [2500]
    assert [r.value for r in expenses] == [500]

    next_year = datetime.now() + timedelta(days=400)
    assert finance.financial_records(RecordKind.INCOME, Period.TODAY, now=next_year) == []


def test_weekly_completions_cover_four_weeks(state, finished_car):
    weeks = get_finance_service().weekly_completions()
    assert len(weeks) == 4
    assert weeks[0].start == weeks[-1].start - timedelta(weeks=3)
    assert sum(w.count for w in weeks) == 1
