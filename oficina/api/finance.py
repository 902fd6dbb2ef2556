# -*- coding: utf-8 -*-
"""
Finance API Router - expenses, invoices and summaries
"""
from typing import Optional, List

from fastapi import APIRouter, Depends, Query

from oficina.api.deps import require_active_subscription
from oficina.models import (
    PREDEFINED_EXPENSES, FixedExpense, FixedExpenseCreate, IssuedInvoice,
    FinancialSummary, ExpensesSummary, FinancialRecord, RecordKind, Period,
)
from oficina.services import get_finance_service, get_stock_ledger, get_problem_service

router = APIRouter(prefix="/finance", tags=["finance"], dependencies=[Depends(require_active_subscription)])


@router.get("/summary", response_model=FinancialSummary)
async def monthly_summary():
    return get_finance_service().monthly_summary()


@router.get("/expenses-summary", response_model=ExpensesSummary)
async def expenses_summary():
    return get_finance_service().expenses_summary()


@router.get("/dashboard")
async def dashboard_badges():
    """Counters shown on the dashboard menu"""
    return {
        "low_stock": len(get_stock_ledger().low_stock()),
        "pending_problems": get_problem_service().pending_count(),
    }


# ==================== Fixed Expenses ====================

@router.get("/expenses/presets")
async def expense_presets():
    return PREDEFINED_EXPENSES


@router.get("/expenses", response_model=List[FixedExpense])
async def list_expenses():
    return get_finance_service().list_fixed_expenses()


@router.post("/expenses", response_model=FixedExpense)
async def add_expense(data: FixedExpenseCreate):
    return get_finance_service().add_fixed_expense(data)


@router.delete("/expenses/{expense_id}")
async def remove_expense(expense_id: str):
    get_finance_service().remove_fixed_expense(expense_id)
    return {"success": True}


# ==================== Invoices ====================

@router.get("/invoices", response_model=List[IssuedInvoice])
async def list_invoices():
    return get_finance_service().list_invoices()


@router.post("/invoices/{car_id}", response_model=IssuedInvoice)
async def issue_invoice(car_id: str):
    return get_finance_service().issue_invoice(car_id)


@router.get("/records", response_model=List[FinancialRecord])
async def financial_records(
    kind: Optional[RecordKind] = Query(None),
    period: Period = Query(Period.ALL),
):
    return get_finance_service().financial_records(kind, period)
