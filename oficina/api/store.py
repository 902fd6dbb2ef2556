# -*- coding: utf-8 -*-
"""
Store portal API Router

Shop floor interface: in-progress cars, stage completion with password
confirmation and problem reports.
"""
from typing import Optional, List

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, Field

from oficina.api.deps import require_store_session
from oficina.models import (
    Car, CarStatus, ServiceStage, StageCompletion, GeneralProblem, GeneralProblemCreate, Session,
)
from oficina.services import get_car_flow_service, get_problem_service

router = APIRouter(prefix="/store", tags=["store"])


class StoreProblem(BaseModel):
    text: str = Field(..., min_length=1)


@router.get("/cars", response_model=List[Car])
async def list_cars(
    search: Optional[str] = Query(None, description="Plate search"),
    stage: Optional[ServiceStage] = Query(None),
    session: Session = Depends(require_store_session),
):
    return get_car_flow_service().list_cars(CarStatus.IN_PROGRESS, search, stage)


@router.post("/cars/{car_id}/complete", response_model=Car)
async def complete_stage(car_id: str, data: StageCompletion, session: Session = Depends(require_store_session)):
    return get_car_flow_service().complete_stage_and_record(
        car_id, data.employee_id or session.user_id, data.password, data.comments, data.photos, data.stage_data,
    )


@router.post("/cars/{car_id}/problems", response_model=Car)
async def report_car_problem(car_id: str, data: StoreProblem, session: Session = Depends(require_store_session)):
    return get_car_flow_service().report_problem(car_id, session.user_name, data.text)


@router.post("/problems", response_model=GeneralProblem)
async def report_general_problem(data: GeneralProblemCreate, session: Session = Depends(require_store_session)):
    """General shop problem, confirmed with the reporter's password"""
    return get_problem_service().report_general_problem(data.reporter_id, data.password, data.description)
