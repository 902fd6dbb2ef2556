# -*- coding: utf-8 -*-
"""
Audit log and notifications API Router
"""
from typing import Optional, List

from fastapi import APIRouter, Depends, Query

from oficina.api.deps import require_active_subscription
from oficina.models import AuditAction, AuditLogEntry, Notification
from oficina.services import get_audit_service, get_notification_center

router = APIRouter(tags=["audit"])


@router.get("/audit", response_model=List[AuditLogEntry], dependencies=[Depends(require_active_subscription)])
async def audit_log(
    action: Optional[AuditAction] = Query(None),
    actor: Optional[str] = Query(None),
    search: Optional[str] = Query(None),
    limit: int = Query(200, ge=1, le=1000),
):
    return get_audit_service().entries(action, actor, search, limit)


@router.get("/notifications", response_model=List[Notification])
async def active_notifications():
    return get_notification_center().active()


@router.delete("/notifications/{notification_id}")
async def dismiss_notification(notification_id: str):
    get_notification_center().dismiss(notification_id)
    return {"success": True}
