# -*- coding: utf-8 -*-
"""
Employees API Router
"""
from typing import List

from fastapi import APIRouter, Depends, HTTPException

from oficina.api.deps import require_active_subscription
from oficina.models import EmployeeCreate, EmployeePublic, EmployeeUpdate
from oficina.services import get_employee_service

router = APIRouter(prefix="/employees", tags=["employees"], dependencies=[Depends(require_active_subscription)])


@router.get("", response_model=List[EmployeePublic])
async def list_employees():
    return get_employee_service().list_employees()


@router.post("", response_model=EmployeePublic)
async def add_employee(data: EmployeeCreate):
    """
    Register employee.

    - **employee_id**: store portal access ID
    - **salary**: creates a matching fixed expense when above zero
    """
    return get_employee_service().add_employee(data)


@router.get("/{employee_id}", response_model=EmployeePublic)
async def get_employee(employee_id: str):
    employee = get_employee_service().get_employee(employee_id)
    if not employee:
        raise HTTPException(status_code=404, detail="Employee not found")
    return employee


@router.patch("/{employee_id}", response_model=EmployeePublic)
async def update_employee(employee_id: str, updates: EmployeeUpdate):
    return get_employee_service().update_employee(employee_id, updates)


@router.delete("/{employee_id}")
async def remove_employee(employee_id: str):
    get_employee_service().remove_employee(employee_id)
    return {"success": True}


@router.get("/{employee_id}/activity")
async def employee_activity(employee_id: str):
    return get_employee_service().activity(employee_id)
