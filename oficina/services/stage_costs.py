# -*- coding: utf-8 -*-
"""
Per-stage cost strategies

Each stage registers a function that turns the stage-specific form data
into a cost, the materials to take out of stock and the details stored on
the car. Adding a stage means registering one more function.
"""
import logging
from typing import Callable, Dict, List, Optional, Any

from pydantic import BaseModel, Field, ValidationError

from oficina.exceptions import InvalidInputError
from oficina.models import (
    ServiceStage, StockItem, UnitOfMeasure, MaterialToDeduct,
    DisassemblyData, RepairData, PaintingData, FinishingData,
)
from oficina.services.formatting import format_brl
from oficina.services.units import convert

logger = logging.getLogger(__name__)

StockLookup = Callable[[str], Optional[StockItem]]

REPAIR_CONSUMABLES = ["Lixa 80", "Lixa 320", "Primer PU"]
PUTTY_ITEM = "Massa Poliéster"
VARNISH_ITEM = "Verniz HS"


class StageCost(BaseModel):
    """Outcome of a stage cost computation"""
    cost: float = 0.0
    materials: List[MaterialToDeduct] = Field(default_factory=list)
    details: Dict[str, Any] = Field(default_factory=dict)
    problem: Optional[str] = Field(None, description="Problem report raised by the stage")


CostStrategy = Callable[[Dict[str, Any], StockLookup], StageCost]

_STRATEGIES: Dict[ServiceStage, CostStrategy] = {}


def register_stage(stage: ServiceStage):
    """Decorator registering the cost strategy of a stage"""
    def decorator(func: CostStrategy) -> CostStrategy:
        _STRATEGIES[stage] = func
        return func
    return decorator


def get_strategy(stage: ServiceStage) -> CostStrategy:
    return _STRATEGIES.get(stage, _no_cost)


def compute_stage_cost(stage: ServiceStage, stage_data: Dict[str, Any], lookup: StockLookup) -> StageCost:
    """Run the strategy registered for stage"""
    try:
        result = get_strategy(stage)(stage_data or {}, lookup)
    except ValidationError as e:
        raise InvalidInputError(
            f"Dados inválidos para a etapa '{stage.value}'.",
            {"errors": e.errors(include_url=False, include_context=False)},
        )
    result.cost = round(result.cost, 2)
    return result


def _material_cost(lookup: StockLookup, name: str, quantity: float, unit: str) -> float:
    """Price quantity given in unit against the item's per-base-unit price"""
    item = lookup(name)
    if item is None:
        return 0.0
    return item.unit_price * convert(quantity, unit, item.unit_of_measure.value)


def _no_cost(stage_data: Dict[str, Any], lookup: StockLookup) -> StageCost:
    return StageCost(details=dict(stage_data))


# ==================== Strategies ====================

@register_stage(ServiceStage.DISASSEMBLY)
def disassembly_cost(stage_data: Dict[str, Any], lookup: StockLookup) -> StageCost:
    """Broken part replacement cost, reported as a problem on the car"""
    data = DisassemblyData.model_validate(stage_data)
    result = StageCost(details=data.model_dump(mode="json"))
    if data.has_broken_part and data.details and data.details.name:
        result.cost = data.details.cost
        result.problem = f"Peça quebrada - {data.details.name}. Custo estimado: {format_brl(data.details.cost)}"
    return result


@register_stage(ServiceStage.REPAIR)
def repair_cost(stage_data: Dict[str, Any], lookup: StockLookup) -> StageCost:
    """Checked consumables in their own stock unit plus putty by weight"""
    data = RepairData.model_validate(stage_data)
    result = StageCost()

    for name, quantity in data.materials.items():
        if quantity <= 0:
            continue
        item = lookup(name)
        if item is None:
            logger.debug(f"Repair consumable '{name}' not in stock, not charged")
            continue
        result.cost += item.unit_price * quantity
        result.materials.append(MaterialToDeduct(name=item.name, quantity=quantity, unit=item.unit_of_measure.value))

    if data.putty_weight > 0:
        result.cost += _material_cost(lookup, PUTTY_ITEM, data.putty_weight, UnitOfMeasure.GRAMAS.value)
        result.materials.append(
            MaterialToDeduct(name=PUTTY_ITEM, quantity=data.putty_weight, unit=UnitOfMeasure.GRAMAS.value)
        )

    result.details = {
        "materials_used": [m.model_dump() for m in result.materials],
        "putty_weight": data.putty_weight,
    }
    return result


@register_stage(ServiceStage.SANDING)
def sanding_cost(stage_data: Dict[str, Any], lookup: StockLookup) -> StageCost:
    return _no_cost(stage_data, lookup)


@register_stage(ServiceStage.PAINTING)
def painting_cost(stage_data: Dict[str, Any], lookup: StockLookup) -> StageCost:
    """Paint and varnish volumes, both in ml"""
    data = PaintingData.model_validate(stage_data)
    result = StageCost(details=data.model_dump(mode="json"))

    if data.paint_qty > 0:
        result.cost += _material_cost(lookup, data.paint_name, data.paint_qty, UnitOfMeasure.ML.value)
        result.materials.append(MaterialToDeduct(name=data.paint_name, quantity=data.paint_qty, unit=UnitOfMeasure.ML.value))
    if data.varnish_qty > 0:
        result.cost += _material_cost(lookup, VARNISH_ITEM, data.varnish_qty, UnitOfMeasure.ML.value)
        result.materials.append(MaterialToDeduct(name=VARNISH_ITEM, quantity=data.varnish_qty, unit=UnitOfMeasure.ML.value))
    return result


@register_stage(ServiceStage.POLISHING)
@register_stage(ServiceStage.WASHING)
def finishing_cost(stage_data: Dict[str, Any], lookup: StockLookup) -> StageCost:
    data = FinishingData.model_validate(stage_data)
    return StageCost(details=data.model_dump())
