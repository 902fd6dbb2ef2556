# -*- coding: utf-8 -*-
"""
Budget (quote) models
"""
from typing import Optional, List
from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field, model_validator


class BudgetStatus(str, Enum):
    PENDING = "Pendente"
    APPROVED = "Aprovado"
    REJECTED = "Rejeitado"
    IN_SERVICE = "Em Serviço"


class BudgetServiceLine(BaseModel):
    """Quoted service line"""
    id: str = ""
    description: str = Field(..., min_length=1)
    value: float = Field(..., ge=0)


class BudgetBase(BaseModel):
    customer_name: str = Field(..., min_length=1, description="Nome do cliente")
    customer_phone: str = ""
    customer_email: str = ""
    car_brand: str = Field(..., min_length=1)
    car_model: str = Field(..., min_length=1)
    car_year: Optional[int] = None
    car_plate: str = Field(..., min_length=1)
    services: List[BudgetServiceLine] = Field(..., min_length=1)
    images: List[str] = Field(default_factory=list, description="Images as data URLs")


class BudgetCreate(BudgetBase):
    """New quote"""
    pass


class Budget(BudgetBase):
    """Quote; total is always the sum of its lines"""
    id: str
    total_value: float = 0.0
    status: BudgetStatus = BudgetStatus.PENDING
    creation_date: datetime = Field(default_factory=datetime.now)

    @model_validator(mode="after")
    def _compute_total(self):
        self.total_value = round(sum(line.value for line in self.services), 2)
        return self


class BudgetStatusUpdate(BaseModel):
    status: BudgetStatus
