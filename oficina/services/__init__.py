# Oficina Services
from . import accounts, audit, budgets, car_flow, completion, employees, finance, payroll, problems, stock
from .state import AppState, get_app_state, reset_app_state
from .audit import AuditService, NotificationCenter, get_audit_service, get_notification_center
from .stock import StockLedger, get_stock_ledger
from .employees import EmployeeService, get_employee_service
from .completion import StageCompletionOrchestrator, get_completion_orchestrator
from .car_flow import CarFlowService, get_car_flow_service
from .budgets import BudgetService, get_budget_service
from .payroll import PayrollService, get_payroll_service
from .problems import ProblemService, get_problem_service
from .finance import FinanceService, get_finance_service
from .accounts import AccountService, get_account_service


def reset_services() -> AppState:
    """Start over with an empty store and fresh service instances"""
    audit._audit_service = None
    audit._notification_center = None
    stock._stock_ledger = None
    employees._employee_service = None
    completion._orchestrator = None
    car_flow._car_flow_service = None
    budgets._budget_service = None
    payroll._payroll_service = None
    problems._problem_service = None
    finance._finance_service = None
    accounts._account_service = None
    return reset_app_state()


__all__ = [
    "AppState", "get_app_state", "reset_app_state", "reset_services",
    "AuditService", "NotificationCenter", "get_audit_service", "get_notification_center",
    "StockLedger", "get_stock_ledger",
    "EmployeeService", "get_employee_service",
    "StageCompletionOrchestrator", "get_completion_orchestrator",
    "CarFlowService", "get_car_flow_service",
    "BudgetService", "get_budget_service",
    "PayrollService", "get_payroll_service",
    "ProblemService", "get_problem_service",
    "FinanceService", "get_finance_service",
    "AccountService", "get_account_service",
]
