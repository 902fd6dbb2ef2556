from datetime import date, timedelta

import pytest

from oficina.exceptions import InvalidTransitionError
from oficina.models import BudgetCreate, BudgetServiceLine, BudgetStatus, CarStatus, ServiceStage
from oficina.services import get_budget_service


@pytest.fixture
def budget(state):
    return get_budget_service().create_budget(BudgetCreate(
        customer_name="João Pereira",
        customer_phone="11 98888-7777",
        car_brand="Fiat",
        car_model="Uno",
        car_year=2015,
        car_plate="XYZ9A87",
        services=[
            BudgetServiceLine(description="Funilaria porta traseira", value=800),
            BudgetServiceLine(description="Pintura completa", value=1700.50),
        ],
        images=[
            "data:image/jpeg;base64,aGVsbG8=",
            "data:;base64,aGVsbG8=",
        ],
    ))


def test_total_is_sum_of_lines(budget):
    assert budget.total_value == pytest.approx(2500.50)
    assert budget.status == BudgetStatus.PENDING
    assert [line.id for line in budget.services] == ["SRV-1", "SRV-2"]


def test_convert_approved_budget(state, budget):
    service = get_budget_service()
    service.update_status(budget.id, BudgetStatus.APPROVED)

    car = service.convert_to_car(budget.id)

    assert car.status == CarStatus.IN_PROGRESS
    assert car.current_stage == ServiceStage.DISASSEMBLY
    assert car.customer == "João Pereira / 11 98888-7777"
    assert car.description == "Funilaria porta traseira; Pintura completa"
    assert car.service_value == pytest.approx(2500.50)
    assert car.vin == ""
    assert car.parts == []
    assert car.delivery_date == date.today() + timedelta(days=7)
    assert car.exit_date == date.today() + timedelta(days=14)
    assert state.budgets[budget.id].status == BudgetStatus.IN_SERVICE
    assert car.id in state.cars


def test_budget_images_become_car_images(state, budget):
    service = get_budget_service()
    service.update_status(budget.id, BudgetStatus.APPROVED)
    car = service.convert_to_car(budget.id)

    first, second = car.images
    assert first.filename == "budget-photo-XYZ9A87-1.jpg"
    assert first.content_type == "image/jpeg"
    assert first.size == 5
    assert second.filename == "budget-photo-XYZ9A87-2.jpg"
    assert second.data == ""
    assert second.size == 0


def test_second_conversion_is_refused(state, budget):
    service = get_budget_service()
    service.update_status(budget.id, BudgetStatus.APPROVED)
    service.convert_to_car(budget.id)

    with pytest.raises(InvalidTransitionError):
        service.convert_to_car(budget.id)
    assert len(state.cars) == 1


def test_pending_or_rejected_budget_is_not_converted(state, budget):
    service = get_budget_service()
    with pytest.raises(InvalidTransitionError):
        service.convert_to_car(budget.id)

    service.update_status(budget.id, BudgetStatus.REJECTED)
    with pytest.raises(InvalidTransitionError):
        service.convert_to_car(budget.id)
    assert state.cars == {}


def test_rejected_budget_has_no_further_transitions(state, budget):
    service = get_budget_service()
    service.update_status(budget.id, BudgetStatus.REJECTED)
    with pytest.raises(InvalidTransitionError):
        service.update_status(budget.id, BudgetStatus.APPROVED)


def test_in_service_is_reached_only_by_conversion(state, budget):
    with pytest.raises(InvalidTransitionError):
        get_budget_service().update_status(budget.id, BudgetStatus.IN_SERVICE)


def test_update_details_recomputes_total(state, budget):
    data = BudgetCreate(
        customer_name="João Pereira",
        car_brand="Fiat",
        car_model="Uno",
        car_plate="XYZ9A87",
        services=[BudgetServiceLine(description="Polimento", value=300)],
    )
    updated = get_budget_service().update_details(budget.id, data)
    assert updated.total_value == 300
    assert updated.creation_date == budget.creation_date
