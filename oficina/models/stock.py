# -*- coding: utf-8 -*-
"""
Stock ledger models
"""
from typing import Optional
from datetime import date, datetime
from enum import Enum

from pydantic import BaseModel, Field

from oficina.models.car import ServiceStage


class StockItemCategory(str, Enum):
    LIXA = "Lixa"
    TINTA = "Tinta"
    MASSA = "Massa"
    VERNIZ = "Verniz"
    FERRAMENTA = "Ferramenta"
    OUTROS = "Outros"


class UnitOfMeasure(str, Enum):
    UNIDADES = "unidades"
    GRAMAS = "gramas"
    ML = "ml"
    LITROS = "litros"
    FOLHAS = "folhas"


class MovementDirection(str, Enum):
    """Entry adds to the shelf, exit takes from it"""
    ENTRADA = "entrada"
    SAIDA = "saída"


class MovementReason(str, Enum):
    COMPRA = "Compra"
    AJUSTE = "Ajuste"
    PERDA = "Perda"
    CONSUMO_SERVICO = "Consumo em serviço"
    CONSUMO_NAO_VINCULADO = "Consumo não vinculado"


class StockItemBase(BaseModel):
    name: str = Field(..., min_length=1, description="Nome do material")
    category: StockItemCategory = StockItemCategory.OUTROS
    unit_of_measure: UnitOfMeasure = UnitOfMeasure.UNIDADES
    minimum_quantity: float = Field(0.0, ge=0, description="Estoque mínimo")
    unit_price: float = Field(0.0, ge=0, description="Preço unitário")
    supplier: Optional[str] = None
    expiry_date: Optional[date] = None


class StockItemCreate(StockItemBase):
    """New item; the opening quantity is booked as a purchase movement"""
    initial_quantity: float = Field(0.0, ge=0)


class StockItemUpdate(BaseModel):
    """Directly editable fields. Quantity only changes through movements."""
    minimum_quantity: Optional[float] = Field(None, ge=0)
    unit_price: Optional[float] = Field(None, ge=0)
    supplier: Optional[str] = None
    expiry_date: Optional[date] = None


class StockItem(StockItemBase):
    id: str
    current_quantity: float = Field(0.0, ge=0)

    @property
    def is_low(self) -> bool:
        return self.current_quantity <= self.minimum_quantity


class StockMovement(BaseModel):
    """Append-only ledger record"""
    id: str
    stock_item_id: str
    stock_item_name: str
    direction: MovementDirection
    quantity: float = Field(..., description="Requested quantity")
    applied_quantity: float = Field(..., description="Quantity that actually moved")
    reason: MovementReason
    timestamp: datetime
    related_car_plate: Optional[str] = None
    related_stage: Optional[ServiceStage] = None

    class Config:
        frozen = True

    @property
    def was_clamped(self) -> bool:
        return self.applied_quantity < self.quantity


class StockMovementCreate(BaseModel):
    """Manual movement registered from the dashboard"""
    stock_item_id: str
    direction: MovementDirection
    quantity: float = Field(..., description="Quantidade")
    reason: MovementReason
    related_car_plate: Optional[str] = None
