# -*- coding: utf-8 -*-
"""
Budget Service

Quotes start PENDING, are APPROVED or REJECTED, and an approved quote
becomes a car in the repair pipeline exactly once.
"""
import logging
from datetime import date, timedelta
from typing import Optional, List

from oficina.config import get_settings
from oficina.exceptions import InvalidTransitionError, NotFoundError
from oficina.models import (
    Budget, BudgetCreate, BudgetStatus, BudgetServiceLine, Car, CarCreate,
)
from oficina.services.attachments import from_data_url
from oficina.services.audit import NotificationCenter, get_notification_center
from oficina.services.car_flow import CarFlowService, get_car_flow_service
from oficina.services.state import AppState, get_app_state, new_id

logger = logging.getLogger(__name__)

# Status changes allowed through update_status. IN_SERVICE is only reached by conversion.
ALLOWED_TRANSITIONS = {
    BudgetStatus.PENDING: {BudgetStatus.APPROVED, BudgetStatus.REJECTED},
    BudgetStatus.APPROVED: {BudgetStatus.PENDING, BudgetStatus.REJECTED},
}


class BudgetService:
    """Service for quotes and their conversion into cars"""

    def __init__(self, state: AppState, car_flow: CarFlowService, notifications: NotificationCenter):
        self.settings = get_settings()
        self.state = state
        self.car_flow = car_flow
        self.notifications = notifications

    def _require(self, budget_id: str) -> Budget:
        budget = self.state.budgets.get(budget_id)
        if budget is None:
            raise NotFoundError("Budget not found", {"budget_id": budget_id})
        return budget

    @staticmethod
    def _number_lines(lines: List[BudgetServiceLine]) -> List[BudgetServiceLine]:
        return [
            line if line.id else line.model_copy(update={"id": f"SRV-{i + 1}"})
            for i, line in enumerate(lines)
        ]

    # ==================== CRUD Operations ====================

    def create_budget(self, data: BudgetCreate) -> Budget:
        payload = data.model_dump()
        payload["services"] = self._number_lines(data.services)
        budget = Budget(id=new_id("ORC"), **payload)
        self.state.budgets[budget.id] = budget
        self.notifications.success(f"Orçamento para {budget.customer_name} criado.")
        logger.info(f"Created budget {budget.id}, total {budget.total_value}")
        return budget

    def update_details(self, budget_id: str, data: BudgetCreate) -> Budget:
        """Replace customer, vehicle and service lines of an open budget"""
        budget = self._require(budget_id)
        if budget.status not in (BudgetStatus.PENDING, BudgetStatus.APPROVED):
            raise InvalidTransitionError(f"Orçamento {budget.status.value} não pode ser editado.")
        payload = data.model_dump()
        payload["services"] = self._number_lines(data.services)
        updated = Budget(id=budget.id, status=budget.status, creation_date=budget.creation_date, **payload)
        self.state.budgets[budget_id] = updated
        return updated

    def update_status(self, budget_id: str, status: BudgetStatus) -> Budget:
        budget = self._require(budget_id)
        if status not in ALLOWED_TRANSITIONS.get(budget.status, set()):
            raise InvalidTransitionError(
                f"Não é possível mudar o orçamento de '{budget.status.value}' para '{status.value}'."
            )
        updated = budget.model_copy(update={"status": status})
        self.state.budgets[budget_id] = updated
        self.notifications.info(f"Orçamento {budget.car_plate} agora está '{status.value}'.")
        return updated

    def get_budget(self, budget_id: str) -> Optional[Budget]:
        return self.state.budgets.get(budget_id)

    def list_budgets(self, status: Optional[BudgetStatus] = None) -> List[Budget]:
        budgets = [b for b in self.state.budgets.values() if status is None or b.status == status]
        return sorted(budgets, key=lambda b: b.creation_date, reverse=True)

    # ==================== Conversion ====================

    def to_car_data(self, budget: Budget, today: Optional[date] = None) -> CarCreate:
        """Map a budget onto car intake data"""
        today = today or date.today()
        return CarCreate(
            brand=budget.car_brand,
            model=budget.car_model,
            year=budget.car_year,
            vin="",
            plate=budget.car_plate,
            customer=f"{budget.customer_name} / {budget.customer_phone}",
            description="; ".join(line.description for line in budget.services),
            delivery_date=today + timedelta(days=self.settings.DELIVERY_LEAD_DAYS),
            exit_date=today + timedelta(days=self.settings.EXIT_LEAD_DAYS),
            service_value=budget.total_value,
            parts=[],
            images=[
                from_data_url(url, f"budget-photo-{budget.car_plate}-{i + 1}.jpg")
                for i, url in enumerate(budget.images)
            ],
        )

    def convert_to_car(self, budget_id: str) -> Car:
        """Open a car from an approved budget and put the budget IN_SERVICE"""
        budget = self._require(budget_id)
        if budget.status == BudgetStatus.IN_SERVICE:
            raise InvalidTransitionError("Este orçamento já foi convertido em serviço.")
        if budget.status != BudgetStatus.APPROVED:
            raise InvalidTransitionError("Apenas orçamentos aprovados podem ser convertidos.")

        car = self.car_flow.add_car(self.to_car_data(budget))
        self.state.budgets[budget_id] = budget.model_copy(update={"status": BudgetStatus.IN_SERVICE})
        logger.info(f"Budget {budget_id} converted to car {car.id}")
        return car


_budget_service: Optional[BudgetService] = None


def get_budget_service() -> BudgetService:
    """Get or create budget service instance"""
    global _budget_service
    if _budget_service is None:
        _budget_service = BudgetService(get_app_state(), get_car_flow_service(), get_notification_center())
    return _budget_service
