# -*- coding: utf-8 -*-
"""
Audit log, notifications, problems and account models
"""
from typing import Optional
from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field


class AuditAction(str, Enum):
    CAR_ADDED = "CAR_ADDED"
    STAGE_COMPLETED = "STAGE_COMPLETED"
    STAGE_REVERTED = "STAGE_REVERTED"
    EMPLOYEE_ADDED = "EMPLOYEE_ADDED"
    EMPLOYEE_UPDATED = "EMPLOYEE_UPDATED"
    EMPLOYEE_REMOVED = "EMPLOYEE_REMOVED"
    PROBLEM_REPORTED = "PROBLEM_REPORTED"
    GENERAL_PROBLEM_REPORTED = "GENERAL_PROBLEM_REPORTED"
    STOCK_ITEM_ADDED = "STOCK_ITEM_ADDED"
    STOCK_MOVEMENT = "STOCK_MOVEMENT"
    STOCK_ITEM_UPDATED = "STOCK_ITEM_UPDATED"
    STOCK_ITEM_REMOVED = "STOCK_ITEM_REMOVED"
    PROFILE_UPDATED = "PROFILE_UPDATED"
    PAYMENT_MADE = "PAYMENT_MADE"
    INVOICE_ISSUED = "INVOICE_ISSUED"


class AuditLogEntry(BaseModel):
    id: str
    timestamp: datetime
    actor_name: str
    actor_id: Optional[str] = None
    action: AuditAction
    details: str
    target_id: Optional[str] = None

    class Config:
        frozen = True


class NotificationType(str, Enum):
    SUCCESS = "success"
    INFO = "info"
    ERROR = "error"


class Notification(BaseModel):
    id: str
    message: str
    type: NotificationType = NotificationType.INFO
    created_at: datetime = Field(default_factory=datetime.now)


class GeneralProblemCreate(BaseModel):
    reporter_id: str = Field(..., description="ID de acesso do funcionário")
    password: str = ""
    description: str = ""


class GeneralProblem(BaseModel):
    """Shop problem not tied to a car"""
    id: str
    timestamp: datetime
    reporter_name: str
    description: str
    resolved: bool = False


class ProblemView(BaseModel):
    """Row of the unified problems list"""
    id: str
    source: str = Field(..., description="car or general")
    timestamp: datetime
    reporter_name: str
    description: str
    resolved: bool
    car_id: Optional[str] = None
    car_plate: Optional[str] = None


class WorkshopProfile(BaseModel):
    name: str = "Oficina Manager"
    tax_id: str = ""
    phone: str = ""
    email: str = ""
    address: str = ""
    logo: Optional[str] = Field(None, description="Logo as data URL")


class SubscriptionStatus(str, Enum):
    TRIAL = "TRIAL"
    ACTIVE = "ACTIVE"
    EXPIRED = "EXPIRED"


class AdminUser(BaseModel):
    name: str
    email: str
    subscription_status: SubscriptionStatus = SubscriptionStatus.TRIAL
    trial_end_date: Optional[datetime] = None


class PortalKind(str, Enum):
    DASHBOARD = "dashboard"
    STORE = "store"


class Session(BaseModel):
    """Who is logged in, and where"""
    portal: PortalKind
    user_name: str
    user_id: Optional[str] = None


class DashboardLogin(BaseModel):
    name: str = Field(..., min_length=1)
    email: str = Field(..., min_length=1)


class StoreLogin(BaseModel):
    employee_id: str
    password: str


class ThemePreference(BaseModel):
    theme: str = Field(..., min_length=1)
