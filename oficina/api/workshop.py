# -*- coding: utf-8 -*-
"""
Workshop profile and UI preferences API Router
"""
from fastapi import APIRouter, Depends

from oficina.api.deps import require_active_subscription
from oficina.models import WorkshopProfile, ThemePreference
from oficina.services import get_account_service

router = APIRouter(tags=["workshop"])


@router.get("/profile", response_model=WorkshopProfile)
async def get_profile():
    return get_account_service().state.profile


@router.put("/profile", response_model=WorkshopProfile, dependencies=[Depends(require_active_subscription)])
async def update_profile(profile: WorkshopProfile):
    return get_account_service().update_profile(profile)


@router.get("/preferences/theme", response_model=ThemePreference)
async def get_theme():
    return ThemePreference(theme=get_account_service().get_theme())


@router.put("/preferences/theme", response_model=ThemePreference)
async def set_theme(data: ThemePreference):
    return ThemePreference(theme=get_account_service().set_theme(data.theme))
