# -*- coding: utf-8 -*-
"""
Employee Service

Employees log into the store portal with their access ID and password,
and re-enter the password to confirm a stage completion. A salary keeps
a matching fixed expense in sync.
"""
import logging
from datetime import datetime
from typing import Optional, List, Dict, Any

from oficina.exceptions import AuthError, InvalidInputError, NotFoundError
from oficina.models import (
    Employee, EmployeeCreate, EmployeeUpdate, FixedExpense, AuditAction,
)
from oficina.services.audit import (
    AuditService, NotificationCenter, get_audit_service, get_notification_center,
)
from oficina.services.state import AppState, get_app_state, new_id

logger = logging.getLogger(__name__)


def salary_expense_id(employee: Employee) -> str:
    return f"salary-{employee.id}"


class EmployeeService:
    """Service for managing employees and their credentials"""

    def __init__(self, state: AppState, audit: AuditService, notifications: NotificationCenter):
        self.state = state
        self.audit = audit
        self.notifications = notifications

    def _require(self, employee_id: str) -> Employee:
        employee = self.state.employees.get(employee_id)
        if employee is None:
            raise NotFoundError("Employee not found", {"employee_id": employee_id})
        return employee

    def _check_unique_access_id(self, access_id: str, exclude: str = None):
        for employee in self.state.employees.values():
            if employee.employee_id == access_id and employee.id != exclude:
                raise InvalidInputError(f"ID de acesso '{access_id}' já está em uso.")

    def _sync_salary_expense(self, employee: Employee):
        """Create, update or drop the salary-derived fixed expense"""
        expense_id = salary_expense_id(employee)
        if employee.salary and employee.salary > 0:
            self.state.fixed_expenses[expense_id] = FixedExpense(
                id=expense_id,
                name=f"Salário - {employee.name}",
                monthly_cost=employee.salary,
                employee_id=employee.id,
            )
        else:
            self.state.fixed_expenses.pop(expense_id, None)

    # ==================== CRUD Operations ====================

    def add_employee(self, data: EmployeeCreate) -> Employee:
        """Register employee"""
        if not data.name.strip() or not data.employee_id.strip():
            raise InvalidInputError("Nome e ID de acesso são obrigatórios.")
        if not data.password:
            raise InvalidInputError("A senha é obrigatória para novos funcionários.")
        self._check_unique_access_id(data.employee_id)

        employee = Employee(id=new_id("EMP"), **data.model_dump())
        self.state.employees[employee.id] = employee
        self._sync_salary_expense(employee)

        self.audit.log(AuditAction.EMPLOYEE_ADDED, f"Adicionou o funcionário {employee.name} ({employee.role.value}).", target_id=employee.id)
        self.notifications.success(f"Funcionário {employee.name} adicionado.")
        logger.info(f"Created employee {employee.id}")
        return employee

    def update_employee(self, employee_id: str, updates: EmployeeUpdate) -> Employee:
        """Update employee; blank password keeps the current one"""
        employee = self._require(employee_id)
        changes = updates.model_dump(exclude_unset=True, exclude_none=True)
        if not changes.get("password"):
            changes.pop("password", None)
        for field in ("name", "employee_id"):
            if field in changes and not (changes[field] or "").strip():
                raise InvalidInputError("Nome e ID de acesso são obrigatórios.")
        if "employee_id" in changes:
            self._check_unique_access_id(changes["employee_id"], exclude=employee_id)

        updated = employee.model_copy(update=changes)
        self.state.employees[employee_id] = updated
        self._sync_salary_expense(updated)

        self.audit.log(AuditAction.EMPLOYEE_UPDATED, f"Atualizou os dados de {updated.name}.", target_id=employee_id)
        self.notifications.success(f"Dados de {updated.name} atualizados.")
        return updated

    def remove_employee(self, employee_id: str) -> None:
        employee = self._require(employee_id)
        del self.state.employees[employee_id]
        self.state.fixed_expenses.pop(salary_expense_id(employee), None)
        self.audit.log(AuditAction.EMPLOYEE_REMOVED, f"Removeu o funcionário {employee.name}.", target_id=employee_id)
        self.notifications.info(f"Funcionário {employee.name} removido.")

    def get_employee(self, employee_id: str) -> Optional[Employee]:
        return self.state.employees.get(employee_id)

    def list_employees(self) -> List[Employee]:
        return sorted(self.state.employees.values(), key=lambda e: e.name.lower())

    def find_by_access_id(self, access_id: str) -> Optional[Employee]:
        for employee in self.state.employees.values():
            if employee.employee_id == access_id:
                return employee
        return None

    # ==================== Credentials ====================

    def authenticate_store(self, access_id: str, password: str) -> Employee:
        """Store portal login: exact match on access ID and password"""
        employee = self.find_by_access_id(access_id)
        if employee is None or employee.password != password:
            raise AuthError("Credenciais da loja inválidas.")
        return employee

    def verify_password(self, employee_id: str, password: str) -> Employee:
        """Re-authentication of an already selected employee"""
        if not employee_id:
            raise InvalidInputError("Por favor, selecione o funcionário responsável.")
        employee = self.state.employees.get(employee_id)
        if employee is None:
            raise InvalidInputError("Por favor, selecione o funcionário responsável.")
        if employee.password != password:
            raise AuthError("Senha do funcionário incorreta.")
        return employee

    # ==================== Activity ====================

    def activity(self, employee_id: str) -> List[Dict[str, Any]]:
        """Work log entries and audit actions of one employee, newest first"""
        employee = self._require(employee_id)
        items = []
        for car in self.state.cars.values():
            for entry in car.work_log:
                if entry.employee_name != employee.name:
                    continue
                items.append({
                    "timestamp": entry.timestamp,
                    "source": "work_log",
                    "car_plate": car.plate,
                    "stage": entry.stage.value,
                    "description": entry.note.text if entry.note else f"Concluiu a etapa '{entry.stage.value}'",
                    "cost": entry.cost,
                })
        for entry in self.state.audit_log:
            if entry.actor_name != employee.name or entry.action == AuditAction.STAGE_COMPLETED:
                continue
            items.append({
                "timestamp": entry.timestamp,
                "source": "audit",
                "car_plate": None,
                "stage": None,
                "description": entry.details,
                "cost": None,
            })
        items.sort(key=lambda x: x["timestamp"] or datetime.min, reverse=True)
        return items


_employee_service: Optional[EmployeeService] = None


def get_employee_service() -> EmployeeService:
    """Get or create employee service instance"""
    global _employee_service
    if _employee_service is None:
        _employee_service = EmployeeService(get_app_state(), get_audit_service(), get_notification_center())
    return _employee_service
