import pytest

from oficina.exceptions import AuthError, InvalidInputError, NotFoundError
from oficina.models import AuditAction
from oficina.services import get_car_flow_service, get_problem_service


def test_report_general_problem(state, painter):
    problem = get_problem_service().report_general_problem("carlos", "1234", "Acabou o Verniz HS no estoque.")
    assert problem.reporter_name == "Carlos Souza"
    assert problem.resolved is False
    assert state.audit_log[0].action == AuditAction.GENERAL_PROBLEM_REPORTED


def test_general_problem_checks_credentials(state, painter):
    service = get_problem_service()
    with pytest.raises(NotFoundError):
        service.report_general_problem("ninguem", "1234", "x")
    with pytest.raises(AuthError):
        service.report_general_problem("carlos", "0000", "x")
    with pytest.raises(InvalidInputError):
        service.report_general_problem("carlos", "1234", "  ")
    assert state.general_problems == {}


def test_unified_list_and_pending_count(state, car, painter):
    service = get_problem_service()
    general = service.report_general_problem("carlos", "1234", "Compressor com vazamento")
    get_car_flow_service().report_problem(car.id, "Carlos Souza", "Risco no capô")

    problems = service.all_problems()
    assert {p.source for p in problems} == {"car", "general"}
    assert service.pending_count() == 2

    service.resolve_general_problem(general.id)
    assert service.pending_count() == 1
    assert [p.source for p in service.all_problems(include_resolved=False)] == ["car"]
