# -*- coding: utf-8 -*-
"""
Application state

Every entity lives in one in-memory store. Services receive the store
explicitly and only touch the collections they own; nothing survives a
process restart.
"""
import secrets
from datetime import datetime
from typing import Optional, Dict, List

from oficina.config import get_settings
from oficina.models import (
    Car, StockItem, StockMovement, Budget, Employee, PaymentRecord, FixedExpense,
    IssuedInvoice, AuditLogEntry, Notification, GeneralProblem, WorkshopProfile,
    AdminUser, Session,
)


def new_id(prefix: str) -> str:
    """Generate unique record ID"""
    return f"{prefix}-{datetime.now().strftime('%Y%m%d')}-{secrets.token_hex(4).upper()}"


class AppState:
    """Process-wide store of all records"""

    def __init__(self):
        self.cars: Dict[str, Car] = {}
        self.stock: Dict[str, StockItem] = {}
        self.movements: List[StockMovement] = []
        self.budgets: Dict[str, Budget] = {}
        self.employees: Dict[str, Employee] = {}
        self.payments: List[PaymentRecord] = []
        self.fixed_expenses: Dict[str, FixedExpense] = {}
        self.invoices: List[IssuedInvoice] = []
        self.audit_log: List[AuditLogEntry] = []
        self.notifications: List[Notification] = []
        self.general_problems: Dict[str, GeneralProblem] = {}
        self.profile = WorkshopProfile(name=get_settings().DEFAULT_WORKSHOP_NAME)
        self.admin: Optional[AdminUser] = None
        self.session: Optional[Session] = None


_app_state: Optional[AppState] = None


def get_app_state() -> AppState:
    """Get or create application state instance"""
    global _app_state
    if _app_state is None:
        _app_state = AppState()
    return _app_state


def reset_app_state() -> AppState:
    """Drop every record and start from an empty store"""
    global _app_state
    _app_state = AppState()
    return _app_state
