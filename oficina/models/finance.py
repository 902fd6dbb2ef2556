# -*- coding: utf-8 -*-
"""
Fixed expenses, invoices and financial summaries
"""
from typing import Optional, List, Dict, Literal
from datetime import date, datetime
from enum import Enum

from pydantic import BaseModel, Field

from oficina.models.car import Attachment


PREDEFINED_EXPENSES = ["Aluguel", "Água", "Luz", "Internet", "Telefone", "Salários", "Outros"]


class FixedExpenseCreate(BaseModel):
    name: str = Field(..., description="Nome da despesa")
    monthly_cost: float = Field(..., description="Custo mensal ou valor da compra")
    is_one_time_purchase: bool = False
    purchase_date: Optional[date] = None
    invoice_image: Optional[Attachment] = None


class FixedExpense(FixedExpenseCreate):
    """Recurring cost, one-time purchase or salary-derived cost"""
    id: str
    employee_id: Optional[str] = Field(None, description="Set when derived from a salary")


class IssuedInvoice(BaseModel):
    id: str
    car_id: str
    car_plate: str
    customer_name: str
    issue_date: datetime
    total_value: float
    type: Literal["income"] = "income"
    invoice_image: Optional[Attachment] = None


class Period(str, Enum):
    """Listing filters over dates"""
    TODAY = "today"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"
    ALL = "all"


class RecordKind(str, Enum):
    INCOME = "income"
    EXPENSE = "expense"


class FinancialRecord(BaseModel):
    """Row of the invoices history"""
    id: str
    kind: RecordKind
    date: datetime
    description: str
    value: float


class WeeklyCompletion(BaseModel):
    label: str
    start: date
    end: date
    count: int = 0


class FinancialSummary(BaseModel):
    """Month at a glance"""
    month: str
    revenue: float = 0.0
    material_costs: float = 0.0
    fixed_costs: float = 0.0
    one_time_purchases: float = 0.0
    salaries_paid: float = 0.0
    expenses: float = 0.0
    profit: float = 0.0
    completed_cars: int = 0
    weekly_completions: List[WeeklyCompletion] = Field(default_factory=list)


class ExpensesSummary(BaseModel):
    potential_fixed_cost: float = 0.0
    materials_consumed: float = 0.0
    total_cost: float = 0.0
    paid_by_employee: Dict[str, float] = Field(default_factory=dict)
