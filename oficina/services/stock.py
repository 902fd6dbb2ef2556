# -*- coding: utf-8 -*-
"""
Stock ledger

Item quantities only change through movements. Unit price, minimum
quantity, supplier and expiry date are edited directly.
"""
import logging
from datetime import date, datetime
from typing import Optional, List

from oficina.exceptions import InvalidInputError, NotFoundError
from oficina.models import (
    StockItem, StockItemCreate, StockItemUpdate, StockMovement, StockMovementCreate,
    MovementDirection, MovementReason, ServiceStage, AuditAction,
)
from oficina.services.audit import (
    AuditService, NotificationCenter, get_audit_service, get_notification_center,
)
from oficina.services.formatting import format_brl, format_quantity
from oficina.services.periods import in_range
from oficina.services.state import AppState, get_app_state, new_id

logger = logging.getLogger(__name__)


class StockLedger:
    """Stock items and their append-only movement history"""

    def __init__(self, state: AppState, audit: AuditService, notifications: NotificationCenter):
        self.state = state
        self.audit = audit
        self.notifications = notifications

    def _require(self, item_id: str) -> StockItem:
        item = self.state.stock.get(item_id)
        if item is None:
            raise NotFoundError("Stock item not found", {"stock_item_id": item_id})
        return item

    # ==================== Movements ====================

    def apply_movement(
        self,
        item_id: str,
        direction: MovementDirection,
        quantity: float,
        reason: MovementReason,
        related_car_plate: str = None,
        related_stage: ServiceStage = None,
    ) -> StockMovement:
        """
        Apply an entry or exit to an item.

        An exit larger than the balance floors the item at zero instead of
        failing. The movement keeps the requested quantity, and the amount
        that actually left the shelf goes to applied_quantity.
        """
        if quantity <= 0:
            raise InvalidInputError("A quantidade deve ser maior que zero.", {"quantity": quantity})
        item = self._require(item_id)

        if direction == MovementDirection.ENTRADA:
            applied = quantity
            new_quantity = item.current_quantity + quantity
        else:
            applied = min(quantity, item.current_quantity)
            new_quantity = max(0.0, item.current_quantity - quantity)
            if applied < quantity:
                logger.warning(
                    f"Exit of {quantity} {item.unit_of_measure.value} from '{item.name}' "
                    f"exceeds balance {item.current_quantity}, clamped to zero"
                )

        movement = StockMovement(
            id=new_id("MOV"),
            stock_item_id=item.id,
            stock_item_name=item.name,
            direction=direction,
            quantity=quantity,
            applied_quantity=applied,
            reason=reason,
            timestamp=datetime.now(),
            related_car_plate=related_car_plate,
            related_stage=related_stage,
        )
        self.state.stock[item.id] = item.model_copy(update={"current_quantity": new_quantity})
        self.state.movements.append(movement)
        return movement

    def register_manual_movement(self, data: StockMovementCreate) -> StockMovement:
        """Dashboard movement: exits may not exceed the current balance"""
        if data.quantity <= 0:
            raise InvalidInputError("A quantidade deve ser maior que zero.")
        item = self._require(data.stock_item_id)
        if data.direction == MovementDirection.SAIDA and data.quantity > item.current_quantity:
            raise InvalidInputError(
                "A quantidade de saída não pode ser maior que o estoque atual.",
                {"current_quantity": item.current_quantity},
            )

        movement = self.apply_movement(
            item.id, data.direction, data.quantity, data.reason,
            related_car_plate=data.related_car_plate,
        )
        self.audit.log(
            AuditAction.STOCK_MOVEMENT,
            f"Registrou {data.direction.value} de {format_quantity(data.quantity)} "
            f"{item.unit_of_measure.value} de '{item.name}' ({data.reason.value}).",
            target_id=item.id,
        )
        self.notifications.success("Movimentação de estoque registrada.")
        return movement

    def movements(
        self,
        item_id: Optional[str] = None,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> List[StockMovement]:
        """Movements, newest first"""
        results = [
            m for m in self.state.movements
            if (item_id is None or m.stock_item_id == item_id)
            and (not (start or end) or in_range(m.timestamp, start, end))
        ]
        return list(reversed(results))

    # ==================== Items ====================

    def add_item(self, data: StockItemCreate) -> StockItem:
        """Create item; a positive opening quantity is booked as a purchase"""
        if self.find_by_name(data.name):
            raise InvalidInputError(f"Material '{data.name}' já existe no estoque.")

        item = StockItem(id=new_id("STK"), current_quantity=0.0, **data.model_dump(exclude={"initial_quantity"}))
        self.state.stock[item.id] = item
        if data.initial_quantity > 0:
            self.apply_movement(item.id, MovementDirection.ENTRADA, data.initial_quantity, MovementReason.COMPRA)

        self.audit.log(AuditAction.STOCK_ITEM_ADDED, f"Adicionou o material '{item.name}' ao estoque.", target_id=item.id)
        self.notifications.success(f"Material '{item.name}' adicionado.")
        logger.info(f"Created stock item {item.id}")
        return self.state.stock[item.id]

    def update_item(self, item_id: str, updates: StockItemUpdate) -> StockItem:
        """Edit price, minimum, supplier or expiry. Only a price change is audited."""
        item = self._require(item_id)
        changes = updates.model_dump(exclude_unset=True, exclude_none=True)
        changes.pop("current_quantity", None)
        updated = item.model_copy(update=changes)
        self.state.stock[item_id] = updated

        if "unit_price" in changes and changes["unit_price"] != item.unit_price:
            self.audit.log(
                AuditAction.STOCK_ITEM_UPDATED,
                f"Alterou o preço de '{item.name}' de {format_brl(item.unit_price)} "
                f"para {format_brl(updated.unit_price)}.",
                target_id=item_id,
            )
        return updated

    def remove_item(self, item_id: str) -> None:
        item = self._require(item_id)
        del self.state.stock[item_id]
        self.audit.log(AuditAction.STOCK_ITEM_REMOVED, f"Removeu o material '{item.name}' do estoque.", target_id=item_id)
        self.notifications.info(f"Material '{item.name}' removido.")

    def get_item(self, item_id: str) -> Optional[StockItem]:
        return self.state.stock.get(item_id)

    def list_items(self, search: Optional[str] = None) -> List[StockItem]:
        items = sorted(self.state.stock.values(), key=lambda i: i.name.lower())
        if search:
            needle = search.lower()
            items = [i for i in items if needle in i.name.lower()]
        return items

    def find_by_name(self, name: str) -> Optional[StockItem]:
        """Case-insensitive lookup by item name"""
        key = (name or "").strip().lower()
        for item in self.state.stock.values():
            if item.name.lower() == key:
                return item
        return None

    # ==================== Reports ====================

    def low_stock(self) -> List[StockItem]:
        """Items at or below their minimum quantity"""
        return [item for item in self.list_items() if item.is_low]

    def inventory_value(self) -> float:
        return round(sum(i.current_quantity * i.unit_price for i in self.state.stock.values()), 2)


_stock_ledger: Optional[StockLedger] = None


def get_stock_ledger() -> StockLedger:
    """Get or create stock ledger instance"""
    global _stock_ledger
    if _stock_ledger is None:
        _stock_ledger = StockLedger(get_app_state(), get_audit_service(), get_notification_center())
    return _stock_ledger
