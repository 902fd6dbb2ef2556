from datetime import datetime, timedelta

import pytest

from oficina.exceptions import AuthError
from oficina.models import AuditAction, NotificationType, PortalKind, SubscriptionStatus, WorkshopProfile
from oficina.services import get_account_service, get_audit_service, get_notification_center


def test_first_dashboard_login_starts_trial(state):
    service = get_account_service()
    now = datetime(2026, 3, 1, 10, 0)
    session = service.login_dashboard("Marta", "marta@oficina.com", now=now)

    assert session.portal == PortalKind.DASHBOARD
    assert state.admin.subscription_status == SubscriptionStatus.TRIAL
    assert state.admin.trial_end_date == now + timedelta(days=14)
    assert service.is_subscription_blocked(now=now + timedelta(days=13)) is False
    assert service.is_subscription_blocked(now=now + timedelta(days=15)) is True


def test_subscribe_unblocks(state):
    service = get_account_service()
    service.login_dashboard("Marta", "marta@oficina.com", now=datetime(2020, 1, 1))
    assert service.is_subscription_blocked()
    service.subscribe()
    assert not service.is_subscription_blocked()


def test_store_login_session(state, painter):
    service = get_account_service()
    session = service.login_store("carlos", "1234")
    assert session.portal == PortalKind.STORE
    assert session.user_id == painter.id
    with pytest.raises(AuthError):
        service.login_store("carlos", "errada")


def test_audit_actor_comes_from_session(state):
    service = get_account_service()
    service.login_dashboard("Marta", "marta@oficina.com")
    service.update_profile(WorkshopProfile(name="Funilaria Central", phone="11 3333-4444"))

    entry = state.audit_log[0]
    assert entry.action == AuditAction.PROFILE_UPDATED
    assert entry.actor_name == "Marta"
    assert state.profile.name == "Funilaria Central"


def test_audit_actor_defaults_to_admin(state):
    entry = get_audit_service().log(AuditAction.PROFILE_UPDATED, "x")
    assert entry.actor_name == "Admin"


def test_theme_is_persisted(state, tmp_path):
    service = get_account_service()
    assert service.get_theme() == "theme-dark"
    service.set_theme("theme-light")
    assert service.get_theme() == "theme-light"
    assert '"oficina-theme": "theme-light"' in (tmp_path / "preferences.json").read_text(encoding="utf-8")


def test_notifications_expire(state):
    center = get_notification_center()
    notification = center.push("Olá", NotificationType.SUCCESS)
    assert center.active(now=notification.created_at) == [notification]
    assert center.active(now=notification.created_at + timedelta(seconds=60)) == []
