import pytest
from fastapi.testclient import TestClient

from oficina.main import app
from oficina.models import (
    CarCreate, EmployeeCreate, EmployeeRole, StockItemCreate, StockItemCategory, UnitOfMeasure,
)
from oficina.services import (
    accounts, reset_services, get_audit_service, get_notification_center, get_employee_service,
    get_stock_ledger, get_car_flow_service,
)

# name, category, unit, quantity, minimum, unit price
STOCK_SEED = [
    ("Lixa 80", StockItemCategory.LIXA, UnitOfMeasure.UNIDADES, 100, 20, 2.50),
    ("Lixa 320", StockItemCategory.LIXA, UnitOfMeasure.UNIDADES, 100, 20, 2.80),
    ("Massa Poliéster", StockItemCategory.MASSA, UnitOfMeasure.GRAMAS, 5000, 1000, 0.045),
    ("Primer PU", StockItemCategory.VERNIZ, UnitOfMeasure.LITROS, 10, 2, 80.00),
    ("Tinta Metálica Azul", StockItemCategory.TINTA, UnitOfMeasure.ML, 3000, 500, 0.15),
    ("Verniz HS", StockItemCategory.VERNIZ, UnitOfMeasure.ML, 4000, 1000, 0.12),
]


@pytest.fixture
def state(tmp_path):
    """Empty store with fresh services; preferences go to a temp dir"""
    state = reset_services()
    accounts._account_service = accounts.AccountService(
        state,
        get_employee_service(),
        get_audit_service(),
        get_notification_center(),
        preferences_file=tmp_path / "preferences.json",
    )
    return state


@pytest.fixture
def stock(state):
    ledger = get_stock_ledger()
    items = {}
    for name, category, unit, quantity, minimum, price in STOCK_SEED:
        item = ledger.add_item(StockItemCreate(
            name=name,
            category=category,
            unit_of_measure=unit,
            initial_quantity=quantity,
            minimum_quantity=minimum,
            unit_price=price,
        ))
        items[name] = item
    return items


@pytest.fixture
def painter(state):
    return get_employee_service().add_employee(EmployeeCreate(
        name="Carlos Souza",
        role=EmployeeRole.PINTOR,
        employee_id="carlos",
        password="1234",
        salary=4500,
    ))


@pytest.fixture
def car(state):
    return get_car_flow_service().add_car(CarCreate(
        brand="Volkswagen",
        model="Gol",
        year=2018,
        plate="ABC1D23",
        customer="Ana Lima / 11 99999-0000",
        description="Porta dianteira amassada",
        service_value=2500.0,
    ))


@pytest.fixture
def client(state):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def complete(state):
    """Complete the current stage of a car and apply its side effects"""
    def _complete(car_id, employee, stage_data=None, password=None, comments=""):
        return get_car_flow_service().complete_stage_and_record(
            car_id,
            employee.id,
            employee.password if password is None else password,
            comments=comments,
            stage_data=stage_data or {},
        )
    return _complete
