# -*- coding: utf-8 -*-
"""
Budgets API Router - quotes and conversion into cars
"""
from typing import Optional, List

from fastapi import APIRouter, Depends, HTTPException, Query

from oficina.api.deps import require_active_subscription
from oficina.models import Budget, BudgetCreate, BudgetStatus, BudgetStatusUpdate, Car
from oficina.services import get_budget_service

router = APIRouter(prefix="/budgets", tags=["budgets"], dependencies=[Depends(require_active_subscription)])


@router.get("", response_model=List[Budget])
async def list_budgets(status: Optional[BudgetStatus] = Query(None)):
    return get_budget_service().list_budgets(status)


@router.post("", response_model=Budget)
async def create_budget(data: BudgetCreate):
    return get_budget_service().create_budget(data)


@router.get("/{budget_id}", response_model=Budget)
async def get_budget(budget_id: str):
    budget = get_budget_service().get_budget(budget_id)
    if not budget:
        raise HTTPException(status_code=404, detail="Budget not found")
    return budget


@router.put("/{budget_id}", response_model=Budget)
async def update_budget(budget_id: str, data: BudgetCreate):
    return get_budget_service().update_details(budget_id, data)


@router.patch("/{budget_id}/status", response_model=Budget)
async def update_status(budget_id: str, data: BudgetStatusUpdate):
    return get_budget_service().update_status(budget_id, data.status)


@router.post("/{budget_id}/convert", response_model=Car)
async def convert_to_car(budget_id: str):
    """Open a car from an approved budget"""
    return get_budget_service().convert_to_car(budget_id)
