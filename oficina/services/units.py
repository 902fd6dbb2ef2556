# -*- coding: utf-8 -*-
"""
Unit conversion between what a stage reports and a stock item's base unit
"""
import logging
from typing import Dict, Tuple

logger = logging.getLogger(__name__)


UNIT_ALIASES: Dict[str, str] = {
    "un": "unidades",
    "unidade": "unidades",
    "g": "gramas",
    "grama": "gramas",
    "l": "litros",
    "litro": "litros",
    "mililitros": "ml",
    "folha": "folhas",
}

# (from, to) -> factor applied to the quantity
CONVERSIONS: Dict[Tuple[str, str], float] = {
    ("ml", "litros"): 0.001,
    ("litros", "ml"): 1000.0,
    ("gramas", "kg"): 0.001,
    ("kg", "gramas"): 1000.0,
}


def normalize_unit(unit: str) -> str:
    key = (unit or "").strip().lower()
    return UNIT_ALIASES.get(key, key)


def convert(quantity: float, from_unit: str, to_unit: str) -> float:
    """
    Convert quantity between units.

    Unknown pairs keep the quantity unchanged.
    """
    source = normalize_unit(from_unit)
    target = normalize_unit(to_unit)
    if source == target:
        return quantity

    factor = CONVERSIONS.get((source, target))
    if factor is None:
        logger.warning(f"No conversion from '{from_unit}' to '{to_unit}', keeping {quantity}")
        return quantity
    return quantity * factor
