# -*- coding: utf-8 -*-
"""
Problem Service - car problem reports and general shop problems
"""
import logging
from datetime import datetime
from typing import Optional, List

from oficina.exceptions import AuthError, InvalidInputError, NotFoundError
from oficina.models import GeneralProblem, ProblemView, AuditAction
from oficina.services.audit import (
    AuditService, NotificationCenter, get_audit_service, get_notification_center,
)
from oficina.services.employees import EmployeeService, get_employee_service
from oficina.services.state import AppState, get_app_state, new_id

logger = logging.getLogger(__name__)


class ProblemService:

    def __init__(
        self,
        state: AppState,
        employees: EmployeeService,
        audit: AuditService,
        notifications: NotificationCenter,
    ):
        self.state = state
        self.employees = employees
        self.audit = audit
        self.notifications = notifications

    def report_general_problem(self, reporter_id: str, password: str, description: str) -> GeneralProblem:
        """Problem not tied to a car, confirmed with the reporter's password"""
        employee = self.employees.find_by_access_id(reporter_id)
        if employee is None:
            raise NotFoundError("Funcionário não encontrado.", {"reporter_id": reporter_id})
        if employee.password != password:
            raise AuthError("Senha do funcionário incorreta.")
        if not description or not description.strip():
            raise InvalidInputError("Descreva o problema.")

        problem = GeneralProblem(
            id=new_id("PRB"),
            timestamp=datetime.now(),
            reporter_name=employee.name,
            description=description.strip(),
        )
        self.state.general_problems[problem.id] = problem
        self.audit.log(
            AuditAction.GENERAL_PROBLEM_REPORTED,
            f"Relatou um problema geral: \"{problem.description}\"",
            target_id=problem.id,
            actor_name=employee.name,
            actor_id=employee.id,
        )
        self.notifications.success("Problema relatado com sucesso.")
        return problem

    def resolve_general_problem(self, problem_id: str) -> GeneralProblem:
        problem = self.state.general_problems.get(problem_id)
        if problem is None:
            raise NotFoundError("Problem not found", {"problem_id": problem_id})
        updated = problem.model_copy(update={"resolved": True})
        self.state.general_problems[problem_id] = updated
        self.notifications.info("Problema geral marcado como resolvido.")
        return updated

    def all_problems(self, include_resolved: bool = True) -> List[ProblemView]:
        """Car problem reports and general problems, newest first"""
        views = []
        for car in self.state.cars.values():
            for entry in car.work_log:
                if not entry.is_problem:
                    continue
                views.append(ProblemView(
                    id=entry.id,
                    source="car",
                    timestamp=entry.timestamp,
                    reporter_name=entry.employee_name,
                    description=entry.note.text,
                    resolved=entry.note.resolved,
                    car_id=car.id,
                    car_plate=car.plate,
                ))
        for problem in self.state.general_problems.values():
            views.append(ProblemView(
                id=problem.id,
                source="general",
                timestamp=problem.timestamp,
                reporter_name=problem.reporter_name,
                description=problem.description,
                resolved=problem.resolved,
            ))
        if not include_resolved:
            views = [v for v in views if not v.resolved]
        views.sort(key=lambda v: v.timestamp, reverse=True)
        return views

    def pending_count(self) -> int:
        return len(self.all_problems(include_resolved=False))


_problem_service: Optional[ProblemService] = None


def get_problem_service() -> ProblemService:
    """Get or create problem service instance"""
    global _problem_service
    if _problem_service is None:
        _problem_service = ProblemService(
            get_app_state(), get_employee_service(), get_audit_service(), get_notification_center(),
        )
    return _problem_service
