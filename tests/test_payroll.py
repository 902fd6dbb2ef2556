import pytest

from oficina.exceptions import InvalidInputError, NotFoundError
from oficina.models import AuditAction, PaymentType
from oficina.services import get_payroll_service


def test_full_salary_payment_leaves_nothing_to_pay(state, painter):
    service = get_payroll_service()
    service.record_payment(painter.id, PaymentType.SALARIO, 4500)

    entry = service.monthly_summary()[0]
    assert entry.salary == 4500
    assert entry.total_paid == 4500
    assert entry.remaining == 0
    assert entry.can_pay is False
    assert state.audit_log[0].action == AuditAction.PAYMENT_MADE
    assert "R$ 4.500,00" in state.audit_log[0].details


def test_advance_reduces_remaining(state, painter):
    service = get_payroll_service()
    service.pay(painter.id, PaymentType.VALE, 1000)
    assert service.remaining_balance(painter.id) == 3500

    payment = service.pay(painter.id, PaymentType.SALARIO)
    assert payment.amount == 3500
    assert service.remaining_balance(painter.id) == 0


def test_advance_above_remaining_is_rejected(state, painter):
    with pytest.raises(InvalidInputError):
        get_payroll_service().pay(painter.id, PaymentType.VALE, 5000)
    assert state.payments == []


def test_non_positive_advance_is_rejected(state, painter):
    with pytest.raises(InvalidInputError):
        get_payroll_service().pay(painter.id, PaymentType.VALE, 0)


def test_nothing_to_pay_after_settlement(state, painter):
    service = get_payroll_service()
    service.pay(painter.id, PaymentType.SALARIO)
    with pytest.raises(InvalidInputError):
        service.pay(painter.id, PaymentType.VALE, 10)


def test_record_payment_trusts_the_caller(state, painter):
    service = get_payroll_service()
    service.record_payment(painter.id, PaymentType.VALE, 6000)
    assert service.remaining_balance(painter.id) == -1500


def test_unknown_employee(state):
    with pytest.raises(NotFoundError):
        get_payroll_service().record_payment("missing", PaymentType.VALE, 10)
