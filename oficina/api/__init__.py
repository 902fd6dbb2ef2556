# Oficina API Routers
from .auth import router as auth_router
from .cars import router as cars_router
from .stock import router as stock_router
from .budgets import router as budgets_router
from .employees import router as employees_router
from .payroll import router as payroll_router
from .finance import router as finance_router
from .problems import router as problems_router
from .audit import router as audit_router
from .workshop import router as workshop_router
from .store import router as store_router

__all__ = [
    "auth_router",
    "cars_router",
    "stock_router",
    "budgets_router",
    "employees_router",
    "payroll_router",
    "finance_router",
    "problems_router",
    "audit_router",
    "workshop_router",
    "store_router",
]
