# -*- coding: utf-8 -*-
"""
Employee and payroll models
"""
from typing import Optional, List
from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field


class EmployeeRole(str, Enum):
    MONTADOR = "Montador"
    REPARADOR = "Reparador"
    LIXADOR = "Lixador"
    PINTOR = "Pintor"
    POLIDOR = "Polidor"
    LAVADOR = "Lavador"
    GERENTE = "Gerente de Loja"


class EmployeeBase(BaseModel):
    name: str = Field(..., min_length=1, description="Nome")
    role: EmployeeRole = EmployeeRole.MONTADOR
    phone: str = ""
    employee_id: str = Field(..., min_length=1, description="ID de acesso ao portal da loja")
    salary: Optional[float] = Field(None, ge=0, description="Salário mensal")


class EmployeeCreate(EmployeeBase):
    password: str = Field(..., min_length=1)


class EmployeeUpdate(BaseModel):
    """Blank password keeps the current one"""
    name: Optional[str] = None
    role: Optional[EmployeeRole] = None
    phone: Optional[str] = None
    employee_id: Optional[str] = None
    salary: Optional[float] = Field(None, ge=0)
    password: Optional[str] = None


class Employee(EmployeeBase):
    """Plaintext credentials, compared by exact match"""
    id: str
    password: str


class EmployeePublic(EmployeeBase):
    """Employee without credentials, for listings"""
    id: str

    class Config:
        from_attributes = True


class PaymentType(str, Enum):
    SALARIO = "Salário"
    VALE = "Vale"


class PaymentCreate(BaseModel):
    employee_id: str
    type: PaymentType
    amount: float
    notes: Optional[str] = None


class PaymentRecord(BaseModel):
    id: str
    employee_id: str
    employee_name: str
    type: PaymentType
    amount: float
    date: datetime
    notes: Optional[str] = None

    class Config:
        frozen = True


class PayrollEntry(BaseModel):
    """Monthly balance of one employee"""
    employee_id: str
    employee_name: str
    role: EmployeeRole
    salary: float = 0.0
    total_paid: float = 0.0
    remaining: float = 0.0
    can_pay: bool = False
    payments: List[PaymentRecord] = Field(default_factory=list)
