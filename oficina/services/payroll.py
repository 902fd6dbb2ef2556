# -*- coding: utf-8 -*-
"""
Payroll ledger: salary and advance payments against monthly salaries
"""
import logging
from datetime import datetime
from typing import Optional, List

from oficina.exceptions import InvalidInputError, NotFoundError
from oficina.models import (
    Employee, PaymentRecord, PaymentType, PayrollEntry, AuditAction,
)
from oficina.services.audit import (
    AuditService, NotificationCenter, get_audit_service, get_notification_center,
)
from oficina.services.formatting import format_brl
from oficina.services.periods import same_month
from oficina.services.state import AppState, get_app_state, new_id

logger = logging.getLogger(__name__)


class PayrollService:
    """Payments made to employees"""

    def __init__(self, state: AppState, audit: AuditService, notifications: NotificationCenter):
        self.state = state
        self.audit = audit
        self.notifications = notifications

    def _require_employee(self, employee_id: str) -> Employee:
        employee = self.state.employees.get(employee_id)
        if employee is None:
            raise NotFoundError("Employee not found", {"employee_id": employee_id})
        return employee

    def payments_for(self, employee_id: str, reference: Optional[datetime] = None) -> List[PaymentRecord]:
        """Payments of one employee in the calendar month of reference"""
        reference = reference or datetime.now()
        return [
            p for p in self.state.payments
            if p.employee_id == employee_id and same_month(p.date, reference)
        ]

    def remaining_balance(self, employee_id: str, reference: Optional[datetime] = None) -> float:
        employee = self._require_employee(employee_id)
        paid = sum(p.amount for p in self.payments_for(employee_id, reference))
        return round((employee.salary or 0.0) - paid, 2)

    # ==================== Payments ====================

    def record_payment(
        self,
        employee_id: str,
        type: PaymentType,
        amount: float,
        notes: str = None,
    ) -> PaymentRecord:
        """
        Record a payment as given.

        No balance check happens here; callers validate with pay().
        """
        employee = self._require_employee(employee_id)
        payment = PaymentRecord(
            id=new_id("PAG"),
            employee_id=employee.id,
            employee_name=employee.name,
            type=type,
            amount=amount,
            date=datetime.now(),
            notes=notes,
        )
        self.state.payments.append(payment)
        self.audit.log(
            AuditAction.PAYMENT_MADE,
            f"Realizou pagamento ({type.value}) de {format_brl(amount)} para {employee.name}.",
            target_id=employee.id,
        )
        self.notifications.success(f"Pagamento para {employee.name} registrado.")
        return payment

    def pay(self, employee_id: str, type: PaymentType, amount: float = None, notes: str = None) -> PaymentRecord:
        """
        Validated payment.

        A salary payment settles the remaining balance; an advance must be
        positive and within the remaining balance.
        """
        remaining = self.remaining_balance(employee_id)
        if remaining <= 0:
            raise InvalidInputError("O salário deste mês já foi pago integralmente.")

        if type == PaymentType.SALARIO:
            if amount is not None and round(amount, 2) != remaining:
                raise InvalidInputError(
                    f"O pagamento de salário deve ser igual ao saldo restante ({format_brl(remaining)}).",
                    {"remaining": remaining},
                )
            amount = remaining
        else:
            if amount is None or amount <= 0:
                raise InvalidInputError("O valor do vale deve ser maior que zero.")
            if amount > remaining:
                raise InvalidInputError(
                    f"O valor do vale não pode ser maior que o saldo restante ({format_brl(remaining)}).",
                    {"remaining": remaining},
                )
        return self.record_payment(employee_id, type, amount, notes)

    # ==================== Reports ====================

    def monthly_summary(self, reference: Optional[datetime] = None) -> List[PayrollEntry]:
        """Salary, paid and remaining per employee for a month"""
        reference = reference or datetime.now()
        entries = []
        for employee in sorted(self.state.employees.values(), key=lambda e: e.name.lower()):
            payments = self.payments_for(employee.id, reference)
            salary = employee.salary or 0.0
            total_paid = round(sum(p.amount for p in payments), 2)
            entries.append(PayrollEntry(
                employee_id=employee.id,
                employee_name=employee.name,
                role=employee.role,
                salary=salary,
                total_paid=total_paid,
                remaining=round(salary - total_paid, 2),
                can_pay=total_paid < salary,
                payments=payments,
            ))
        return entries

    def history(self, employee_id: Optional[str] = None) -> List[PaymentRecord]:
        payments = [p for p in self.state.payments if employee_id is None or p.employee_id == employee_id]
        return sorted(payments, key=lambda p: p.date, reverse=True)


_payroll_service: Optional[PayrollService] = None


def get_payroll_service() -> PayrollService:
    """Get or create payroll service instance"""
    global _payroll_service
    if _payroll_service is None:
        _payroll_service = PayrollService(get_app_state(), get_audit_service(), get_notification_center())
    return _payroll_service
