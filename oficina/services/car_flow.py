# -*- coding: utf-8 -*-
"""
Car stage state machine

A car moves forward one stage per completion and is COMPLETED after the
last stage. Reverting moves it back without rolling back cost or the work
log: money and material already spent stay recorded.
"""
import logging
from datetime import date, datetime
from typing import Optional, List, Tuple, Dict, Any

from oficina.exceptions import InvalidInputError, InvalidTransitionError, NotFoundError
from oficina.models import (
    Car, CarCreate, CarStatus, ServiceStage, STAGES_ORDER, StageDetail, Attachment,
    WorkLogEntry, CommentNote, ProblemReport, MaterialSummary, MaterialToDeduct,
    AuditAction, Period,
)
from oficina.services.attachments import from_data_url
from oficina.services.audit import (
    AuditService, NotificationCenter, get_audit_service, get_notification_center,
)
from oficina.services.completion import StageCompletionOrchestrator, get_completion_orchestrator
from oficina.services.employees import EmployeeService, get_employee_service
from oficina.services.formatting import format_quantity
from oficina.services.periods import period_bounds, in_range
from oficina.services.stage_costs import compute_stage_cost
from oficina.services.state import AppState, get_app_state, new_id
from oficina.services.stock import StockLedger, get_stock_ledger

logger = logging.getLogger(__name__)


class CarFlowService:
    """Service moving cars through the repair pipeline"""

    def __init__(
        self,
        state: AppState,
        employees: EmployeeService,
        ledger: StockLedger,
        orchestrator: StageCompletionOrchestrator,
        audit: AuditService,
        notifications: NotificationCenter,
    ):
        self.state = state
        self.employees = employees
        self.ledger = ledger
        self.orchestrator = orchestrator
        self.audit = audit
        self.notifications = notifications

    def _require(self, car_id: str) -> Car:
        car = self.state.cars.get(car_id)
        if car is None:
            raise NotFoundError("Car not found", {"car_id": car_id})
        return car

    def _store(self, car: Car) -> Car:
        self.state.cars[car.id] = car
        return car

    # ==================== Intake ====================

    def add_car(self, data: CarCreate) -> Car:
        """Register car at the first stage"""
        car = Car(
            id=new_id("CAR"),
            stage_details={stage: StageDetail() for stage in STAGES_ORDER},
            **data.model_dump(),
        )
        self._store(car)
        self.audit.log(
            AuditAction.CAR_ADDED,
            f"Adicionou o carro {car.brand} {car.model} ({car.plate}).",
            target_id=car.id,
        )
        self.notifications.success(f"Carro {car.plate} adicionado.")
        logger.info(f"Created car {car.id} ({car.plate})")
        return car

    def get_car(self, car_id: str) -> Optional[Car]:
        return self.state.cars.get(car_id)

    # ==================== Stage Transitions ====================

    def complete_stage(
        self,
        car_id: str,
        employee_id: Optional[str],
        auth_password: str,
        comments: str = "",
        photos: Optional[List[Attachment]] = None,
        stage_data: Optional[Dict[str, Any]] = None,
    ) -> Tuple[Car, List[MaterialToDeduct]]:
        """
        Complete the current stage of a car.

        Returns the updated car and the materials to take out of stock.
        The stored car is left untouched; the orchestrator stores the result.
        """
        car = self._require(car_id)
        employee = self.employees.verify_password(employee_id, auth_password)
        if car.status != CarStatus.IN_PROGRESS:
            raise InvalidTransitionError(f"Carro {car.plate} não está em andamento.")

        stage = car.current_stage
        result = compute_stage_cost(stage, stage_data or {}, self.ledger.find_by_name)
        photos = list(photos or [])
        now = datetime.now()

        entries = [WorkLogEntry(
            id=new_id("LOG"),
            timestamp=now,
            stage=stage,
            employee_name=employee.name,
            note=CommentNote(text=comments.strip()) if comments and comments.strip() else None,
            photos=photos,
            cost=result.cost,
            materials_used=[
                MaterialSummary(name=m.name, quantity=f"{format_quantity(m.quantity)} {m.unit}")
                for m in result.materials
            ],
        )]
        if result.problem:
            entries.append(WorkLogEntry(
                id=new_id("LOG"),
                timestamp=now,
                stage=stage,
                employee_name=employee.name,
                note=ProblemReport(text=result.problem),
            ))

        updated = car.model_copy(deep=True)
        detail = updated.stage_details[stage]
        detail.photos.extend(photos)
        detail.expenses = round(detail.expenses + result.cost, 2)
        detail.details = result.details
        updated.work_log.extend(entries)
        updated.accumulated_cost = round(updated.accumulated_cost + result.cost, 2)
        updated.has_problem_report = updated.has_problem_report or bool(result.problem)

        if updated.is_last_stage:
            updated.status = CarStatus.COMPLETED
            updated.exit_date = date.today()
        else:
            updated.current_stage = STAGES_ORDER[updated.stage_index + 1]

        return updated, result.materials

    def complete_stage_and_record(
        self,
        car_id: str,
        employee_id: Optional[str],
        auth_password: str,
        comments: str = "",
        photos: Optional[List[str]] = None,
        stage_data: Optional[Dict[str, Any]] = None,
    ) -> Car:
        """Complete the current stage from data URL photos and apply its side effects"""
        car = self._require(car_id)
        attachments = [
            from_data_url(url, f"{car.plate}-{car.current_stage.value}-{i + 1}.jpg")
            for i, url in enumerate(photos or [])
        ]
        updated, materials = self.complete_stage(
            car_id, employee_id, auth_password, comments, attachments, stage_data,
        )
        return self.orchestrator.on_stage_completed(updated, materials)

    def revert_stage(self, car_id: str) -> Car:
        """Move a car back one stage, keeping its cost and work log"""
        car = self._require(car_id)
        index = car.stage_index
        if index <= 0:
            self.notifications.error("Não é possível reverter a primeira etapa.")
            raise InvalidTransitionError("Não é possível reverter a primeira etapa.")

        previous = STAGES_ORDER[index - 1]
        updated = self._store(car.model_copy(update={
            "current_stage": previous,
            "status": CarStatus.IN_PROGRESS,
            "has_unread_update": False,
        }))
        self.audit.log(
            AuditAction.STAGE_REVERTED,
            f"Reverteu o carro {car.plate} da etapa '{car.current_stage.value}' para '{previous.value}'. "
            f"Histórico e custos da etapa anterior foram mantidos.",
            target_id=car.id,
        )
        self.notifications.info(f"Carro {car.plate} revertido. Custos e histórico foram mantidos.")
        logger.info(f"Car {car.plate} reverted from '{car.current_stage.value}' to '{previous.value}'")
        return updated

    def mark_read(self, car_id: str) -> Car:
        """Clear unread and problem flags when the car is opened"""
        car = self._require(car_id)
        return self._store(car.model_copy(update={"has_unread_update": False, "has_problem_report": False}))

    # ==================== Work Log ====================

    def report_problem(self, car_id: str, employee_name: str, text: str) -> Car:
        """Add a problem report at the car's current stage"""
        if not text or not text.strip():
            raise InvalidInputError("Descreva o problema.")
        car = self._require(car_id)
        entry = WorkLogEntry(
            id=new_id("LOG"),
            timestamp=datetime.now(),
            stage=car.current_stage,
            employee_name=employee_name,
            note=ProblemReport(text=text.strip()),
        )
        updated = self._store(car.model_copy(update={
            "work_log": car.work_log + [entry],
            "has_problem_report": True,
        }))
        self.audit.log(
            AuditAction.PROBLEM_REPORTED,
            f"Relatou um problema no carro {car.plate}: \"{text.strip()}\"",
            target_id=car.id,
            actor_name=employee_name,
        )
        self.notifications.success("Problema relatado com sucesso.")
        return updated

    def resolve_problem(self, car_id: str, entry_id: str) -> Car:
        """Mark a problem report resolved; the car flag follows the open problems"""
        car = self._require(car_id)
        work_log = []
        found = False
        for entry in car.work_log:
            if entry.id == entry_id:
                if not entry.is_problem:
                    raise InvalidInputError("Este registro não é um problema.")
                entry = entry.model_copy(update={"note": entry.note.model_copy(update={"resolved": True})})
                found = True
            work_log.append(entry)
        if not found:
            raise NotFoundError("Work log entry not found", {"entry_id": entry_id})

        has_open = any(e.is_open_problem for e in work_log)
        updated = self._store(car.model_copy(update={"work_log": work_log, "has_problem_report": has_open}))
        self.notifications.info("Problema resolvido.")
        return updated

    def add_stage_photos(self, car_id: str, photos: List[str]) -> Car:
        """Attach photos to the car's current stage"""
        car = self._require(car_id)
        updated = car.model_copy(deep=True)
        detail = updated.stage_details[car.current_stage]
        offset = len(detail.photos)
        detail.photos.extend(
            from_data_url(url, f"{car.plate}-{car.current_stage.value}-{offset + i + 1}.jpg")
            for i, url in enumerate(photos)
        )
        return self._store(updated)

    # ==================== Listings ====================

    def list_cars(
        self,
        view: CarStatus = CarStatus.IN_PROGRESS,
        search: Optional[str] = None,
        stage: Optional[ServiceStage] = None,
        period: Optional[Period] = None,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> List[Car]:
        """
        List cars for a view.

        HISTORY lists completed cars by exit date, optionally limited to a
        period or a custom start/end range.
        """
        wanted = CarStatus.COMPLETED if view == CarStatus.HISTORY else view
        if view == CarStatus.HISTORY and period and not (start or end):
            start, end = period_bounds(period)

        needle = search.strip().lower() if search else None
        results = []
        for car in self.state.cars.values():
            if car.status != wanted:
                continue
            if stage and car.current_stage != stage:
                continue
            if needle and needle not in car.plate.lower():
                continue
            if view == CarStatus.HISTORY and (start or end) and not in_range(car.exit_date, start, end):
                continue
            results.append(car)

        if view == CarStatus.HISTORY:
            results.sort(key=lambda c: c.exit_date or date.min, reverse=True)
        else:
            results.sort(key=lambda c: c.created_at, reverse=True)
        return results


_car_flow_service: Optional[CarFlowService] = None


def get_car_flow_service() -> CarFlowService:
    """Get or create car flow service instance"""
    global _car_flow_service
    if _car_flow_service is None:
        _car_flow_service = CarFlowService(
            get_app_state(),
            get_employee_service(),
            get_stock_ledger(),
            get_completion_orchestrator(),
            get_audit_service(),
            get_notification_center(),
        )
    return _car_flow_service
