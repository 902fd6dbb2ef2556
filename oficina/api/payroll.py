# -*- coding: utf-8 -*-
"""
Payroll API Router
"""
from typing import Optional, List

from fastapi import APIRouter, Depends, Query

from oficina.api.deps import require_active_subscription
from oficina.models import PaymentCreate, PaymentRecord, PayrollEntry
from oficina.services import get_payroll_service

router = APIRouter(prefix="/payroll", tags=["payroll"], dependencies=[Depends(require_active_subscription)])


@router.get("", response_model=List[PayrollEntry])
async def monthly_payroll():
    """Salary, paid and remaining per employee this month"""
    return get_payroll_service().monthly_summary()


@router.get("/payments", response_model=List[PaymentRecord])
async def payment_history(employee_id: Optional[str] = Query(None)):
    return get_payroll_service().history(employee_id)


@router.post("/payments", response_model=PaymentRecord)
async def make_payment(data: PaymentCreate):
    """
    Pay an employee.

    - **Salário**: settles the remaining balance
    - **Vale**: advance within the remaining balance
    """
    return get_payroll_service().pay(data.employee_id, data.type, data.amount, data.notes)
