import pytest

from oficina.exceptions import InvalidInputError, NotFoundError
from oficina.models import (
    AuditAction, MaterialToDeduct, MovementDirection, MovementReason, ServiceStage,
    StockItemCreate, StockItemUpdate, StockMovementCreate, UnitOfMeasure,
)
from oficina.services import get_stock_ledger, get_completion_orchestrator


def test_exit_larger_than_balance_clamps_at_zero(state, stock, caplog):
    ledger = get_stock_ledger()
    primer = stock["Primer PU"]

    movement = ledger.apply_movement(primer.id, MovementDirection.SAIDA, 15, MovementReason.AJUSTE)

    assert state.stock[primer.id].current_quantity == 0
    assert movement.quantity == 15
    assert movement.applied_quantity == 10
    assert movement.was_clamped
    assert "clamped to zero" in caplog.text


def test_entry_adds_unconditionally(state, stock):
    ledger = get_stock_ledger()
    lixa = stock["Lixa 80"]
    movement = ledger.apply_movement(lixa.id, MovementDirection.ENTRADA, 50, MovementReason.COMPRA)
    assert state.stock[lixa.id].current_quantity == 150
    assert movement.applied_quantity == 50
    assert not movement.was_clamped


def test_movements_are_appended(state, stock):
    ledger = get_stock_ledger()
    before = len(state.movements)
    ledger.apply_movement(stock["Lixa 80"].id, MovementDirection.SAIDA, 1, MovementReason.PERDA)
    ledger.apply_movement(stock["Lixa 80"].id, MovementDirection.ENTRADA, 1, MovementReason.COMPRA)
    assert len(state.movements) == before + 2
    assert ledger.movements(stock["Lixa 80"].id)[0].direction == MovementDirection.ENTRADA


def test_non_positive_quantity_is_rejected(state, stock):
    with pytest.raises(InvalidInputError):
        get_stock_ledger().apply_movement(stock["Lixa 80"].id, MovementDirection.SAIDA, 0, MovementReason.PERDA)


def test_unknown_item_is_rejected(state):
    with pytest.raises(NotFoundError):
        get_stock_ledger().apply_movement("nope", MovementDirection.ENTRADA, 1, MovementReason.COMPRA)


def test_low_stock(state, stock):
    ledger = get_stock_ledger()
    assert ledger.low_stock() == []

    ledger.apply_movement(stock["Verniz HS"].id, MovementDirection.SAIDA, 3000, MovementReason.CONSUMO_NAO_VINCULADO)
    assert [i.name for i in ledger.low_stock()] == ["Verniz HS"]


def test_manual_exit_cannot_exceed_balance(state, stock):
    ledger = get_stock_ledger()
    with pytest.raises(InvalidInputError):
        ledger.register_manual_movement(StockMovementCreate(
            stock_item_id=stock["Primer PU"].id,
            direction=MovementDirection.SAIDA,
            quantity=11,
            reason=MovementReason.PERDA,
        ))
    assert state.stock[stock["Primer PU"].id].current_quantity == 10


def test_manual_movement_is_audited(state, stock):
    get_stock_ledger().register_manual_movement(StockMovementCreate(
        stock_item_id=stock["Primer PU"].id,
        direction=MovementDirection.SAIDA,
        quantity=2,
        reason=MovementReason.PERDA,
    ))
    assert state.stock[stock["Primer PU"].id].current_quantity == 8
    assert state.audit_log[0].action == AuditAction.STOCK_MOVEMENT


def test_only_price_change_is_audited(state, stock):
    ledger = get_stock_ledger()
    lixa = stock["Lixa 80"]
    audit_size = len(state.audit_log)

    ledger.update_item(lixa.id, StockItemUpdate(minimum_quantity=30, supplier="3M"))
    assert len(state.audit_log) == audit_size

    updated = ledger.update_item(lixa.id, StockItemUpdate(unit_price=3.10))
    assert updated.unit_price == 3.10
    assert updated.current_quantity == 100
    assert state.audit_log[0].action == AuditAction.STOCK_ITEM_UPDATED
    assert "R$ 2,50" in state.audit_log[0].details
    assert "R$ 3,10" in state.audit_log[0].details


def test_null_fields_keep_current_values(state, stock):
    ledger = get_stock_ledger()
    lixa = stock["Lixa 80"]

    updated = ledger.update_item(lixa.id, StockItemUpdate(unit_price=None, minimum_quantity=None))
    assert updated.unit_price == 2.50
    assert updated.minimum_quantity == 20
    assert state.stock[lixa.id].unit_price == 2.50
    assert ledger.low_stock() == []


def test_find_by_name_ignores_case(state, stock):
    assert get_stock_ledger().find_by_name("verniz hs").id == stock["Verniz HS"].id
    assert get_stock_ledger().find_by_name("Verniz XYZ") is None


def test_duplicate_name_is_rejected(state, stock):
    with pytest.raises(InvalidInputError):
        get_stock_ledger().add_item(StockItemCreate(name="lixa 80"))


def test_remove_item(state, stock):
    ledger = get_stock_ledger()
    ledger.remove_item(stock["Lixa 80"].id)
    assert ledger.get_item(stock["Lixa 80"].id) is None
    assert state.audit_log[0].action == AuditAction.STOCK_ITEM_REMOVED


def test_inventory_value(state, stock):
    expected = 100 * 2.5 + 100 * 2.8 + 5000 * 0.045 + 10 * 80 + 3000 * 0.15 + 4000 * 0.12
    assert get_stock_ledger().inventory_value() == pytest.approx(expected)


def test_deduction_converts_ml_to_litres(state, stock, car):
    orchestrator = get_completion_orchestrator()
    movements = orchestrator.deduct_materials(
        car, ServiceStage.REPAIR, [MaterialToDeduct(name="Primer PU", quantity=500, unit=UnitOfMeasure.ML.value)],
    )
    assert movements[0].quantity == pytest.approx(0.5)
    assert state.stock[stock["Primer PU"].id].current_quantity == pytest.approx(9.5)


def test_deduction_skips_unknown_materials(state, stock, car):
    movements = get_completion_orchestrator().deduct_materials(
        car, ServiceStage.PAINTING, [MaterialToDeduct(name="Tinta Vermelha", quantity=100, unit="ml")],
    )
    assert movements == []
