# -*- coding: utf-8 -*-
"""
Audit log and user-facing notifications
"""
import logging
from datetime import datetime, timedelta
from typing import Optional, List

from oficina.config import get_settings
from oficina.exceptions import NotFoundError
from oficina.models import AuditAction, AuditLogEntry, Notification, NotificationType
from oficina.services.state import AppState, get_app_state, new_id

logger = logging.getLogger(__name__)

DEFAULT_ACTOR = "Admin"


class AuditService:
    """Append-only history of who did what. Newest entry first."""

    def __init__(self, state: AppState):
        self.state = state

    def log(
        self,
        action: AuditAction,
        details: str,
        target_id: str = None,
        actor_name: str = None,
        actor_id: str = None,
    ) -> AuditLogEntry:
        """Record an action, attributing it to the current session when no actor is given"""
        session = self.state.session
        if actor_name is None:
            actor_name = session.user_name if session else DEFAULT_ACTOR
            actor_id = actor_id or (session.user_id if session else None)

        entry = AuditLogEntry(
            id=new_id("AUD"),
            timestamp=datetime.now(),
            actor_name=actor_name,
            actor_id=actor_id,
            action=action,
            details=details,
            target_id=target_id,
        )
        self.state.audit_log.insert(0, entry)
        logger.info(f"[{action.value}] {actor_name}: {details}")
        return entry

    def entries(
        self,
        action: Optional[AuditAction] = None,
        actor_name: Optional[str] = None,
        search: Optional[str] = None,
        limit: int = 200,
    ) -> List[AuditLogEntry]:
        """List audit entries with filters"""
        results = []
        needle = search.lower() if search else None
        for entry in self.state.audit_log:
            if action and entry.action != action:
                continue
            if actor_name and entry.actor_name != actor_name:
                continue
            if needle and needle not in entry.details.lower() and needle not in entry.actor_name.lower():
                continue
            results.append(entry)
        return results[:limit]


class NotificationCenter:
    """Short-lived messages for the UI, dropped after a fixed TTL"""

    def __init__(self, state: AppState, ttl_seconds: int = None):
        self.state = state
        self.ttl = timedelta(seconds=ttl_seconds if ttl_seconds is not None else get_settings().NOTIFICATION_TTL_SECONDS)

    def push(self, message: str, type: NotificationType = NotificationType.INFO) -> Notification:
        notification = Notification(id=new_id("NTF"), message=message, type=type)
        self.state.notifications.append(notification)
        return notification

    def success(self, message: str) -> Notification:
        return self.push(message, NotificationType.SUCCESS)

    def info(self, message: str) -> Notification:
        return self.push(message, NotificationType.INFO)

    def error(self, message: str) -> Notification:
        return self.push(message, NotificationType.ERROR)

    def active(self, now: Optional[datetime] = None) -> List[Notification]:
        """Drop expired notifications and return the rest"""
        now = now or datetime.now()
        self.state.notifications = [
            n for n in self.state.notifications if now - n.created_at < self.ttl
        ]
        return list(self.state.notifications)

    def dismiss(self, notification_id: str) -> None:
        remaining = [n for n in self.state.notifications if n.id != notification_id]
        if len(remaining) == len(self.state.notifications):
            raise NotFoundError("Notification not found")
        self.state.notifications = remaining


_audit_service: Optional[AuditService] = None
_notification_center: Optional[NotificationCenter] = None


def get_audit_service() -> AuditService:
    """Get or create audit service instance"""
    global _audit_service
    if _audit_service is None:
        _audit_service = AuditService(get_app_state())
    return _audit_service


def get_notification_center() -> NotificationCenter:
    """Get or create notification center instance"""
    global _notification_center
    if _notification_center is None:
        _notification_center = NotificationCenter(get_app_state())
    return _notification_center
