# -*- coding: utf-8 -*-
"""
Problems API Router
"""
from typing import List

from fastapi import APIRouter, Depends, Query

from oficina.api.deps import require_active_subscription
from oficina.models import GeneralProblem, ProblemView
from oficina.services import get_problem_service

router = APIRouter(prefix="/problems", tags=["problems"], dependencies=[Depends(require_active_subscription)])


@router.get("", response_model=List[ProblemView])
async def list_problems(include_resolved: bool = Query(True)):
    """Car problem reports and general problems, newest first"""
    return get_problem_service().all_problems(include_resolved)


@router.post("/general/{problem_id}/resolve", response_model=GeneralProblem)
async def resolve_general_problem(problem_id: str):
    return get_problem_service().resolve_general_problem(problem_id)
