# -*- coding: utf-8 -*-
"""
Finance Service

Fixed expenses, issued invoices and the monthly figures shown on the
dashboard. Material costs are valued at the item's current unit price.
"""
import logging
from datetime import date, datetime, timedelta
from typing import Optional, List

from oficina.exceptions import InvalidInputError, InvalidTransitionError, NotFoundError
from oficina.models import (
    CarStatus, FixedExpense, FixedExpenseCreate, IssuedInvoice, MovementDirection,
    FinancialSummary, ExpensesSummary, FinancialRecord, RecordKind, Period,
    WeeklyCompletion, AuditAction,
)
from oficina.services.audit import (
    AuditService, NotificationCenter, get_audit_service, get_notification_center,
)
from oficina.services.formatting import format_brl
from oficina.services.periods import period_bounds, in_range, same_month, start_of_week
from oficina.services.state import AppState, get_app_state, new_id

logger = logging.getLogger(__name__)

WEEK_LABELS = ["3 sem. atrás", "2 sem. atrás", "Semana passada", "Esta semana"]


class FinanceService:
    """Service for expenses, invoices and summaries"""

    def __init__(self, state: AppState, audit: AuditService, notifications: NotificationCenter):
        self.state = state
        self.audit = audit
        self.notifications = notifications

    # ==================== Fixed Expenses ====================

    def add_fixed_expense(self, data: FixedExpenseCreate) -> FixedExpense:
        if not data.name or not data.name.strip():
            raise InvalidInputError("Informe o nome da despesa.")
        if data.monthly_cost <= 0:
            raise InvalidInputError("O valor deve ser maior que zero.")
        if data.is_one_time_purchase and data.purchase_date is None:
            data = data.model_copy(update={"purchase_date": date.today()})

        expense = FixedExpense(id=new_id("DSP"), **data.model_dump())
        self.state.fixed_expenses[expense.id] = expense
        self.notifications.success(f"Despesa '{expense.name}' adicionada.")
        return expense

    def remove_fixed_expense(self, expense_id: str) -> None:
        expense = self.state.fixed_expenses.get(expense_id)
        if expense is None:
            raise NotFoundError("Expense not found", {"expense_id": expense_id})
        if expense.employee_id:
            raise InvalidInputError("Despesas de salário são gerenciadas pelo cadastro do funcionário.")
        del self.state.fixed_expenses[expense_id]

    def list_fixed_expenses(self) -> List[FixedExpense]:
        return sorted(self.state.fixed_expenses.values(), key=lambda e: e.name.lower())

    # ==================== Invoices ====================

    def issue_invoice(self, car_id: str) -> IssuedInvoice:
        """Invoice a completed car for its service value"""
        car = self.state.cars.get(car_id)
        if car is None:
            raise NotFoundError("Car not found", {"car_id": car_id})
        if car.status != CarStatus.COMPLETED:
            raise InvalidTransitionError("Apenas carros concluídos podem ser faturados.")
        if any(inv.car_id == car_id for inv in self.state.invoices):
            raise InvalidTransitionError("Este carro já foi faturado.", {"car_id": car_id})

        invoice = IssuedInvoice(
            id=new_id("NF"),
            car_id=car.id,
            car_plate=car.plate,
            customer_name=car.customer.split(" / ")[0],
            issue_date=datetime.now(),
            total_value=car.service_value,
        )
        self.state.invoices.insert(0, invoice)
        self.audit.log(
            AuditAction.INVOICE_ISSUED,
            f"Emitiu nota fiscal de {format_brl(invoice.total_value)} para o carro {car.plate}.",
            target_id=car.id,
        )
        self.notifications.success(f"Nota fiscal do carro {car.plate} emitida.")
        return invoice

    def list_invoices(self) -> List[IssuedInvoice]:
        return list(self.state.invoices)

    # ==================== Summaries ====================

    def _materials_consumed(self, reference: Optional[datetime] = None) -> float:
        total = 0.0
        for movement in self.state.movements:
            if movement.direction != MovementDirection.SAIDA:
                continue
            if reference and not same_month(movement.timestamp, reference):
                continue
            item = self.state.stock.get(movement.stock_item_id)
            total += movement.applied_quantity * (item.unit_price if item else 0.0)
        return round(total, 2)

    def weekly_completions(self, today: Optional[date] = None) -> List[WeeklyCompletion]:
        """Cars completed in each of the last four weeks, oldest first"""
        today = today or date.today()
        this_week = start_of_week(today)
        weeks = []
        for offset, label in zip(range(3, -1, -1), WEEK_LABELS):
            start = this_week - timedelta(weeks=offset)
            end = start + timedelta(days=6)
            count = sum(
                1 for car in self.state.cars.values()
                if car.status == CarStatus.COMPLETED and in_range(car.exit_date, start, end)
            )
            weeks.append(WeeklyCompletion(label=label, start=start, end=end, count=count))
        return weeks

    def monthly_summary(self, reference: Optional[datetime] = None) -> FinancialSummary:
        """Revenue, expenses and profit for the month of reference"""
        reference = reference or datetime.now()
        completed = [
            car for car in self.state.cars.values()
            if car.status == CarStatus.COMPLETED and same_month(car.exit_date, reference)
        ]
        revenue = round(sum(car.service_value for car in completed), 2)

        material_costs = self._materials_consumed(reference)
        fixed_costs = round(sum(
            e.monthly_cost for e in self.state.fixed_expenses.values()
            if not e.is_one_time_purchase and not e.employee_id
        ), 2)
        one_time = round(sum(
            e.monthly_cost for e in self.state.fixed_expenses.values()
            if e.is_one_time_purchase and same_month(e.purchase_date, reference)
        ), 2)
        salaries = round(sum(p.amount for p in self.state.payments if same_month(p.date, reference)), 2)
        expenses = round(material_costs + fixed_costs + one_time + salaries, 2)

        return FinancialSummary(
            month=reference.strftime("%Y-%m"),
            revenue=revenue,
            material_costs=material_costs,
            fixed_costs=fixed_costs,
            one_time_purchases=one_time,
            salaries_paid=salaries,
            expenses=expenses,
            profit=round(revenue - expenses, 2),
            completed_cars=len(completed),
            weekly_completions=self.weekly_completions(reference.date()),
        )

    def expenses_summary(self) -> ExpensesSummary:
        """Potential monthly fixed cost, all materials consumed and payments per employee"""
        potential = round(sum(
            e.monthly_cost for e in self.state.fixed_expenses.values() if not e.is_one_time_purchase
        ), 2)
        materials = self._materials_consumed()
        paid = {}
        for payment in self.state.payments:
            paid[payment.employee_name] = round(paid.get(payment.employee_name, 0.0) + payment.amount, 2)
        return ExpensesSummary(
            potential_fixed_cost=potential,
            materials_consumed=materials,
            total_cost=round(potential + materials, 2),
            paid_by_employee=paid,
        )

    def financial_records(
        self,
        kind: Optional[RecordKind] = None,
        period: Period = Period.ALL,
        now: Optional[datetime] = None,
    ) -> List[FinancialRecord]:
        """Incomes (invoices) and expenses (payments, purchases), newest first"""
        records = []
        for invoice in self.state.invoices:
            records.append(FinancialRecord(
                id=invoice.id,
                kind=RecordKind.INCOME,
                date=invoice.issue_date,
                description=f"Nota fiscal - {invoice.car_plate} ({invoice.customer_name})",
                value=invoice.total_value,
            ))
        for payment in self.state.payments:
            records.append(FinancialRecord(
                id=payment.id,
                kind=RecordKind.EXPENSE,
                date=payment.date,
                description=f"{payment.type.value} - {payment.employee_name}",
                value=payment.amount,
            ))
        for expense in self.state.fixed_expenses.values():
            if expense.employee_id:
                continue
            when = expense.purchase_date if expense.is_one_time_purchase else None
            records.append(FinancialRecord(
                id=expense.id,
                kind=RecordKind.EXPENSE,
                date=datetime.combine(when, datetime.min.time()) if when else (now or datetime.now()),
                description=expense.name,
                value=expense.monthly_cost,
            ))

        start, end = period_bounds(period, now)
        records = [
            r for r in records
            if (kind is None or r.kind == kind) and in_range(r.date, start, end)
        ]
        records.sort(key=lambda r: r.date, reverse=True)
        return records


_finance_service: Optional[FinanceService] = None


def get_finance_service() -> FinanceService:
    """Get or create finance service instance"""
    global _finance_service
    if _finance_service is None:
        _finance_service = FinanceService(get_app_state(), get_audit_service(), get_notification_center())
    return _finance_service
