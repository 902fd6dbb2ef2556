# -*- coding: utf-8 -*-
"""
Shared route dependencies
"""
from fastapi import HTTPException

from oficina.models import PortalKind, Session
from oficina.services import get_account_service


async def require_active_subscription():
    """Block the dashboard once the trial is over"""
    if get_account_service().is_subscription_blocked():
        raise HTTPException(status_code=402, detail="Assinatura expirada. Assine para continuar.")


async def require_store_session() -> Session:
    session = get_account_service().state.session
    if session is None or session.portal != PortalKind.STORE:
        raise HTTPException(status_code=401, detail="Faça login no portal da loja.")
    return session
