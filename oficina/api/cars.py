# -*- coding: utf-8 -*-
"""
Cars API Router - repair pipeline (dashboard)
"""
from datetime import date
from typing import Optional, List

from fastapi import APIRouter, Depends, HTTPException, Query

from oficina.api.deps import require_active_subscription
from oficina.models import (
    Car, CarCreate, CarStatus, ServiceStage, STAGES_ORDER, Period,
    StageCompletion, ProblemCreate, PhotosAdd,
)
from oficina.services import get_car_flow_service
from oficina.services.stage_costs import REPAIR_CONSUMABLES

router = APIRouter(prefix="/cars", tags=["cars"], dependencies=[Depends(require_active_subscription)])


@router.get("/stages")
async def get_stages():
    """Stage order and the consumables offered in the repair stage"""
    return {
        "stages": [stage.value for stage in STAGES_ORDER],
        "repair_consumables": REPAIR_CONSUMABLES,
    }


@router.get("", response_model=List[Car])
async def list_cars(
    view: CarStatus = Query(CarStatus.IN_PROGRESS),
    search: Optional[str] = Query(None, description="Plate search"),
    stage: Optional[ServiceStage] = Query(None),
    period: Optional[Period] = Query(None, description="History period"),
    start: Optional[date] = Query(None),
    end: Optional[date] = Query(None),
):
    """
    List cars.

    - **view**: Em Andamento, Concluído or Histórico
    - **period** / **start** / **end**: exit date filter for the history view
    """
    return get_car_flow_service().list_cars(view, search, stage, period, start, end)


@router.post("", response_model=Car)
async def add_car(data: CarCreate):
    return get_car_flow_service().add_car(data)


@router.get("/{car_id}", response_model=Car)
async def get_car(car_id: str):
    car = get_car_flow_service().get_car(car_id)
    if not car:
        raise HTTPException(status_code=404, detail="Car not found")
    return car


@router.post("/{car_id}/read", response_model=Car)
async def mark_read(car_id: str):
    """Clear unread and problem flags when the detail view is opened"""
    return get_car_flow_service().mark_read(car_id)


@router.post("/{car_id}/complete", response_model=Car)
async def complete_stage(car_id: str, data: StageCompletion):
    """
    Complete the current stage.

    - **employee_id**: responsible employee
    - **password**: employee password, re-entered as confirmation
    - **stage_data**: stage-specific form data
    """
    return get_car_flow_service().complete_stage_and_record(
        car_id, data.employee_id, data.password, data.comments, data.photos, data.stage_data,
    )


@router.post("/{car_id}/revert", response_model=Car)
async def revert_stage(car_id: str):
    return get_car_flow_service().revert_stage(car_id)


@router.post("/{car_id}/problems", response_model=Car)
async def report_problem(car_id: str, data: ProblemCreate):
    return get_car_flow_service().report_problem(car_id, data.employee_name, data.text)


@router.post("/{car_id}/problems/{entry_id}/resolve", response_model=Car)
async def resolve_problem(car_id: str, entry_id: str):
    return get_car_flow_service().resolve_problem(car_id, entry_id)


@router.post("/{car_id}/photos", response_model=Car)
async def add_photos(car_id: str, data: PhotosAdd):
    return get_car_flow_service().add_stage_photos(car_id, data.photos)
