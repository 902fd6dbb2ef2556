# -*- coding: utf-8 -*-
"""
Stage completion orchestrator

Takes the car produced by a stage completion, stores it, takes the
consumed materials out of stock and records the completion in the audit
log.
"""
import logging
from typing import Optional, List

from oficina.models import (
    Car, MaterialToDeduct, MovementDirection, MovementReason, StockMovement,
    WorkLogEntry, AuditAction, STAGES_ORDER, CarStatus,
)
from oficina.services.audit import (
    AuditService, NotificationCenter, get_audit_service, get_notification_center,
)
from oficina.services.formatting import format_brl
from oficina.services.state import AppState, get_app_state
from oficina.services.stock import StockLedger, get_stock_ledger
from oficina.services.units import convert

logger = logging.getLogger(__name__)


class StageCompletionOrchestrator:
    """Applies the side effects of a completed stage"""

    def __init__(
        self,
        state: AppState,
        ledger: StockLedger,
        audit: AuditService,
        notifications: NotificationCenter,
    ):
        self.state = state
        self.ledger = ledger
        self.audit = audit
        self.notifications = notifications

    @staticmethod
    def completed_stage(car: Car):
        """Stage that was just finished: the previous one, or the last when the car is done"""
        if car.status == CarStatus.COMPLETED:
            return STAGES_ORDER[-1]
        return STAGES_ORDER[max(car.stage_index - 1, 0)]

    @staticmethod
    def _completion_entry(car: Car, stage) -> Optional[WorkLogEntry]:
        for entry in reversed(car.work_log):
            if entry.stage == stage and not entry.is_problem:
                return entry
        return None

    def deduct_materials(self, car: Car, stage, materials: List[MaterialToDeduct]) -> List[StockMovement]:
        """Take materials out of stock. Names missing from stock are skipped."""
        movements = []
        for material in materials:
            item = self.ledger.find_by_name(material.name)
            if item is None:
                logger.debug(f"Material '{material.name}' not in stock, skipping deduction")
                continue
            quantity = convert(material.quantity, material.unit, item.unit_of_measure.value)
            if quantity <= 0:
                continue
            movements.append(self.ledger.apply_movement(
                item.id,
                MovementDirection.SAIDA,
                quantity,
                MovementReason.CONSUMO_SERVICO,
                related_car_plate=car.plate,
                related_stage=stage,
            ))
        return movements

    def on_stage_completed(self, updated_car: Car, materials_to_deduct: List[MaterialToDeduct]) -> Car:
        car = updated_car.model_copy(update={"has_unread_update": True})
        self.state.cars[car.id] = car

        stage = self.completed_stage(car)
        self.deduct_materials(car, stage, materials_to_deduct)

        entry = self._completion_entry(car, stage)
        cost = format_brl(entry.cost) if entry and entry.cost is not None else "N/A"
        self.audit.log(
            AuditAction.STAGE_COMPLETED,
            f"Concluiu a etapa '{stage.value}' para o carro {car.plate}. Custo: {cost}.",
            target_id=car.id,
            actor_name=entry.employee_name if entry else None,
        )
        self.notifications.success(f"Etapa '{stage.value}' do carro {car.plate} concluída.")
        logger.info(f"Car {car.plate} completed stage '{stage.value}', now at '{car.current_stage.value}' ({car.status.value})")
        return car


_orchestrator: Optional[StageCompletionOrchestrator] = None


def get_completion_orchestrator() -> StageCompletionOrchestrator:
    """Get or create stage completion orchestrator instance"""
    global _orchestrator
    if _orchestrator is None:
        _orchestrator = StageCompletionOrchestrator(
            get_app_state(), get_stock_ledger(), get_audit_service(), get_notification_center(),
        )
    return _orchestrator
