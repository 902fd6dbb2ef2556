# -*- coding: utf-8 -*-
"""
Auth API Router - dashboard and store sessions, subscription
"""
from typing import Optional

from fastapi import APIRouter
from pydantic import BaseModel

from oficina.models import AdminUser, DashboardLogin, Session, StoreLogin
from oficina.services import get_account_service

router = APIRouter(prefix="/auth", tags=["auth"])


class SubscriptionInfo(BaseModel):
    admin: Optional[AdminUser] = None
    blocked: bool = False
    trial_days_left: Optional[int] = None


@router.post("/dashboard/login", response_model=Session)
async def dashboard_login(data: DashboardLogin):
    """Admin login; the first one starts the trial"""
    return get_account_service().login_dashboard(data.name, data.email)


@router.post("/store/login", response_model=Session)
async def store_login(data: StoreLogin):
    """Employee login with access ID and password"""
    return get_account_service().login_store(data.employee_id, data.password)


@router.post("/logout")
async def logout():
    get_account_service().logout()
    return {"success": True}


@router.get("/session", response_model=Session)
async def current_session():
    return get_account_service().current_session()


@router.get("/subscription", response_model=SubscriptionInfo)
async def subscription_info():
    service = get_account_service()
    return SubscriptionInfo(
        admin=service.state.admin,
        blocked=service.is_subscription_blocked(),
        trial_days_left=service.trial_days_left(),
    )


@router.post("/subscribe", response_model=AdminUser)
async def subscribe():
    return get_account_service().subscribe()
