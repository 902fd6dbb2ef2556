# Oficina Pydantic Models
from .car import (
    ServiceStage, STAGES_ORDER, CarStatus, Attachment, CarPart, StageDetail,
    CommentNote, ProblemReport, MaterialSummary, WorkLogEntry, MaterialToDeduct,
    DisassemblyData, RepairData, PaintingData, FinishingData, BrokenPart,
    Car, CarCreate, StageCompletion, ProblemCreate, PhotosAdd,
)
from .stock import (
    StockItemCategory, UnitOfMeasure, MovementDirection, MovementReason,
    StockItem, StockItemCreate, StockItemUpdate, StockMovement, StockMovementCreate,
)
from .budget import BudgetStatus, BudgetServiceLine, Budget, BudgetCreate, BudgetStatusUpdate
from .employee import (
    EmployeeRole, Employee, EmployeeCreate, EmployeeUpdate, EmployeePublic,
    PaymentType, PaymentCreate, PaymentRecord, PayrollEntry,
)
from .finance import (
    PREDEFINED_EXPENSES, FixedExpense, FixedExpenseCreate, IssuedInvoice, Period,
    RecordKind, FinancialRecord, WeeklyCompletion, FinancialSummary, ExpensesSummary,
)
from .audit import (
    AuditAction, AuditLogEntry, NotificationType, Notification, GeneralProblem,
    GeneralProblemCreate, ProblemView, WorkshopProfile, SubscriptionStatus, AdminUser,
    PortalKind, Session, DashboardLogin, StoreLogin, ThemePreference,
)

__all__ = [
    # Car
    "ServiceStage", "STAGES_ORDER", "CarStatus", "Attachment", "CarPart", "StageDetail",
    "CommentNote", "ProblemReport", "MaterialSummary", "WorkLogEntry", "MaterialToDeduct",
    "DisassemblyData", "RepairData", "PaintingData", "FinishingData", "BrokenPart",
    "Car", "CarCreate", "StageCompletion", "ProblemCreate", "PhotosAdd",
    # Stock
    "StockItemCategory", "UnitOfMeasure", "MovementDirection", "MovementReason",
    "StockItem", "StockItemCreate", "StockItemUpdate", "StockMovement", "StockMovementCreate",
    # Budget
    "BudgetStatus", "BudgetServiceLine", "Budget", "BudgetCreate", "BudgetStatusUpdate",
    # Employee
    "EmployeeRole", "Employee", "EmployeeCreate", "EmployeeUpdate", "EmployeePublic",
    "PaymentType", "PaymentCreate", "PaymentRecord", "PayrollEntry",
    # Finance
    "PREDEFINED_EXPENSES", "FixedExpense", "FixedExpenseCreate", "IssuedInvoice", "Period",
    "RecordKind", "FinancialRecord", "WeeklyCompletion", "FinancialSummary", "ExpensesSummary",
    # Audit / accounts
    "AuditAction", "AuditLogEntry", "NotificationType", "Notification", "GeneralProblem",
    "GeneralProblemCreate", "ProblemView", "WorkshopProfile", "SubscriptionStatus", "AdminUser",
    "PortalKind", "Session", "DashboardLogin", "StoreLogin", "ThemePreference",
]
