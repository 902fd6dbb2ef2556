# -*- coding: utf-8 -*-
"""
Account Service

Dashboard admin session with its trial subscription, store session,
workshop profile and the UI theme preference. The theme is the only value
written to disk.
"""
import json
import logging
from datetime import datetime, timedelta
from pathlib import Path
from typing import Optional

from oficina.config import get_settings
from oficina.exceptions import AuthError
from oficina.models import (
    AdminUser, Session, PortalKind, SubscriptionStatus, WorkshopProfile, AuditAction,
)
from oficina.services.audit import (
    AuditService, NotificationCenter, get_audit_service, get_notification_center,
)
from oficina.services.employees import EmployeeService, get_employee_service
from oficina.services.state import AppState, get_app_state

logger = logging.getLogger(__name__)


class AccountService:
    """Sessions, subscription, profile and preferences"""

    def __init__(
        self,
        state: AppState,
        employees: EmployeeService,
        audit: AuditService,
        notifications: NotificationCenter,
        preferences_file: Optional[Path] = None,
    ):
        self.settings = get_settings()
        self.state = state
        self.employees = employees
        self.audit = audit
        self.notifications = notifications
        self._preferences_file = preferences_file or self.settings.DATA_DIR / self.settings.PREFERENCES_FILE

    # ==================== Sessions ====================

    def login_dashboard(self, name: str, email: str, now: Optional[datetime] = None) -> Session:
        """Admin login. The first login opens the trial period."""
        now = now or datetime.now()
        if self.state.admin is None:
            self.state.admin = AdminUser(
                name=name,
                email=email,
                subscription_status=SubscriptionStatus.TRIAL,
                trial_end_date=now + timedelta(days=self.settings.TRIAL_DAYS),
            )
            logger.info(f"Trial started for {email}, ends {self.state.admin.trial_end_date:%Y-%m-%d}")
        else:
            self.state.admin = self.state.admin.model_copy(update={"name": name, "email": email})

        self.state.session = Session(portal=PortalKind.DASHBOARD, user_name=name, user_id=email)
        return self.state.session

    def login_store(self, employee_id: str, password: str) -> Session:
        employee = self.employees.authenticate_store(employee_id, password)
        self.state.session = Session(portal=PortalKind.STORE, user_name=employee.name, user_id=employee.id)
        logger.info(f"Store login: {employee.name}")
        return self.state.session

    def logout(self) -> None:
        self.state.session = None

    def current_session(self) -> Session:
        if self.state.session is None:
            raise AuthError("Nenhuma sessão ativa.")
        return self.state.session

    # ==================== Subscription ====================

    def is_subscription_blocked(self, now: Optional[datetime] = None) -> bool:
        """Expired subscription, or trial past its end date"""
        admin = self.state.admin
        if admin is None:
            return False
        if admin.subscription_status == SubscriptionStatus.EXPIRED:
            return True
        if admin.subscription_status == SubscriptionStatus.TRIAL and admin.trial_end_date:
            return (now or datetime.now()) > admin.trial_end_date
        return False

    def trial_days_left(self, now: Optional[datetime] = None) -> Optional[int]:
        admin = self.state.admin
        if admin is None or admin.subscription_status != SubscriptionStatus.TRIAL or not admin.trial_end_date:
            return None
        delta = admin.trial_end_date - (now or datetime.now())
        return max(0, delta.days + (1 if delta.seconds else 0))

    def subscribe(self) -> AdminUser:
        if self.state.admin is None:
            raise AuthError("Faça login no painel para assinar.")
        self.state.admin = self.state.admin.model_copy(update={"subscription_status": SubscriptionStatus.ACTIVE})
        self.notifications.success("Assinatura ativada com sucesso!")
        return self.state.admin

    # ==================== Profile ====================

    def update_profile(self, profile: WorkshopProfile) -> WorkshopProfile:
        self.state.profile = profile
        self.audit.log(AuditAction.PROFILE_UPDATED, "Atualizou o perfil da oficina.")
        self.notifications.success("Perfil atualizado.")
        return profile

    # ==================== Preferences ====================

    def _load_preferences(self) -> dict:
        if not self._preferences_file.exists():
            return {}
        with open(self._preferences_file, "r", encoding="utf-8") as f:
            return json.load(f)

    def get_theme(self) -> str:
        return self._load_preferences().get(self.settings.THEME_KEY, self.settings.DEFAULT_THEME)

    def set_theme(self, theme: str) -> str:
        preferences = self._load_preferences()
        preferences[self.settings.THEME_KEY] = theme
        self._preferences_file.parent.mkdir(parents=True, exist_ok=True)
        with open(self._preferences_file, "w", encoding="utf-8") as f:
            json.dump(preferences, f, ensure_ascii=False, indent=2)
        return theme


_account_service: Optional[AccountService] = None


def get_account_service() -> AccountService:
    """Get or create account service instance"""
    global _account_service
    if _account_service is None:
        _account_service = AccountService(
            get_app_state(), get_employee_service(), get_audit_service(), get_notification_center(),
        )
    return _account_service
