# -*- coding: utf-8 -*-
"""
Stock API Router
"""
from datetime import date
from typing import Optional, List

from fastapi import APIRouter, Depends, HTTPException, Query

from oficina.api.deps import require_active_subscription
from oficina.models import (
    StockItem, StockItemCreate, StockItemUpdate, StockMovement, StockMovementCreate,
)
from oficina.services import get_stock_ledger

router = APIRouter(prefix="/stock", tags=["stock"], dependencies=[Depends(require_active_subscription)])


@router.get("", response_model=List[StockItem])
async def list_items(search: Optional[str] = Query(None)):
    return get_stock_ledger().list_items(search)


@router.get("/low", response_model=List[StockItem])
async def low_stock():
    """Items at or below their minimum quantity"""
    return get_stock_ledger().low_stock()


@router.get("/value")
async def inventory_value():
    return {"value": get_stock_ledger().inventory_value()}


@router.post("", response_model=StockItem)
async def add_item(data: StockItemCreate):
    return get_stock_ledger().add_item(data)


@router.get("/movements", response_model=List[StockMovement])
async def list_movements(
    item_id: Optional[str] = Query(None),
    start: Optional[date] = Query(None),
    end: Optional[date] = Query(None),
):
    return get_stock_ledger().movements(item_id, start, end)


@router.post("/movements", response_model=StockMovement)
async def register_movement(data: StockMovementCreate):
    """Manual entry or exit; exits cannot exceed the balance"""
    return get_stock_ledger().register_manual_movement(data)


@router.get("/{item_id}", response_model=StockItem)
async def get_item(item_id: str):
    item = get_stock_ledger().get_item(item_id)
    if not item:
        raise HTTPException(status_code=404, detail="Stock item not found")
    return item


@router.patch("/{item_id}", response_model=StockItem)
async def update_item(item_id: str, updates: StockItemUpdate):
    return get_stock_ledger().update_item(item_id, updates)


@router.delete("/{item_id}")
async def remove_item(item_id: str):
    get_stock_ledger().remove_item(item_id)
    return {"success": True}
