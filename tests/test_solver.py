import json

import pytest

from core.errors import SolveError
from core.solver import solve_expression, solve_general


def test_derivative_example():
    sol = solve_expression("d/dx(x^3 + 2x^2 - 5x + 1)")
    assert sol.type == "Derivative"
    assert sol.result == "3*x^2 + 4*x - 5"
    assert sol.method == "Power Rule / Chain Rule"
    assert len(sol.steps) >= 2
    assert sol.steps[-1].expression == sol.result


@pytest.mark.parametrize("expr, expected", [
    ("d/dx(sin(x^2))", "2*x*cos(x^2)"),
    ("derivative of x^2", "2*x"),
    ("d/dx(ln(x^2 + 1))", "2*x/(x^2 + 1)"),
    ("d/dt(t^3)", "3*t^2"),
])
def test_derivatives(expr, expected):
    sol = solve_expression(expr)
    assert sol.result == expected
    assert not sol.result.endswith("+ C")


def test_integral_appends_constant():
    sol = solve_expression("integral(x^2)")
    assert sol.type == "Integral"
    assert sol.result == "x^3/3 + C"
    assert sol.method == "Power Rule"
    assert sol.steps[-1].expression == sol.result


def test_integral_sign_form():
    sol = solve_expression("∫ x^2 dx")
    assert sol.result.endswith("+ C")
    assert sol.steps[0].expression == "∫ x^2 dx"


def test_integration_by_parts_label():
    sol = solve_expression("integral(x*e^x)")
    assert sol.method == "Integration by Parts"
    assert sol.result.endswith(" + C")


def test_definite_integral_has_no_constant():
    sol = solve_expression("integral(x^2, x, 0, 3)")
    assert sol.result == "9"
    assert sol.steps[1].method == "Fundamental Theorem of Calculus"


def test_malformed_derivative():
    with pytest.raises(SolveError, match="Failed to compute derivative"):
        solve_expression("d/dx(")


def test_malformed_integral():
    with pytest.raises(SolveError, match="Failed to compute integral"):
        solve_expression("integral(x^2, x, 1)")


def test_implicit_differentiation():
    sol = solve_expression("x^2 + y^2 = 25")
    assert sol.type == "Implicit Differentiation"
    assert sol.result == "-x/y"
    assert len(sol.steps) == 4
    assert sol.steps[-1].expression == "dy/dx = -x/y"


def test_implicit_with_request_suffix():
    sol = solve_expression("x*y = 1, find dy/dx")
    assert sol.result == "-y/x"


def test_limit_needing_lhopital():
    sol = solve_expression("limit(sin(x)/x, x, 0)")
    assert sol.type == "Limit"
    assert sol.result == "1"
    assert sol.method == "L'Hôpital's Rule"


def test_limit_direct_substitution():
    sol = solve_expression("limit(x^2 + 1, x->2)")
    assert sol.result == "5"
    assert sol.method == "Direct Substitution"


def test_limit_at_infinity():
    sol = solve_expression("limit(1/x, x, oo)")
    assert sol.result == "0"
    assert sol.method == "Limit at Infinity"


def test_bad_limit():
    with pytest.raises(SolveError, match="Failed to evaluate limit"):
        solve_expression("limit(sin(x)/x)")


def test_partial_derivative():
    sol = solve_expression("∂/∂x(x^2*y + y^3)")
    assert sol.type == "Partial Derivative"
    assert sol.result == "2*x*y"


def test_linear_equation():
    sol = solve_expression("2x + 3 = 7")
    assert sol.type == "Equation"
    assert sol.result == "x = 2"
    assert sol.method == "Linear Equation"
    assert sol.steps[0].expression == "2x + 3 = 7"


def test_quadratic_equation():
    sol = solve_expression("x^2 + 2x = 8")
    assert sol.type == "Quadratic"
    assert sol.method == "Quadratic Formula"
    assert sol.result.startswith("x = ")
    roots = {r.strip() for r in sol.result[len("x = "):].split(",")}
    assert roots == {"-4", "2"}


def test_numeric_equation():
    sol = solve_expression("2 + 2 = 4")
    assert sol.result == "True"


def test_quadratic_expression_is_factored():
    sol = solve_expression("x^2 + 3x + 2")
    assert sol.result == "(x + 1)*(x + 2)"
    assert sol.method == "Algebraic Simplification"


def test_trig_identity_simplifies():
    sol = solve_expression("sin(x)^2 + cos(x)^2")
    assert sol.type == "Trigonometric"
    assert sol.result == "1"


def test_arithmetic_expression():
    sol = solve_expression("2 + 3*4")
    assert sol.type == "Expression"
    assert sol.result == "14"
    assert sol.steps[0].explanation == "Original expression"


def test_already_simple_uses_direct_evaluation():
    sol = solve_general("x")
    assert sol.method == "Direct Evaluation"
    assert [s.expression for s in sol.steps] == ["x", "x"]


def test_general_failure_message():
    with pytest.raises(SolveError, match="Failed to solve"):
        solve_expression("3 +* )")


def test_preferred_topic_overrides_classifier():
    sol = solve_expression("x^2", preferred_topic="derivative")
    assert sol.type == "Derivative"
    assert sol.result == "2*x"


def test_solves_are_logged(query_log):
    solve_expression("d/dx(x^2)")
    with pytest.raises(SolveError):
        solve_expression("d/dx(")
    entries = [json.loads(line) for line in query_log.read_text().splitlines()]
    assert entries[0]["answer"] == "2*x"
    assert entries[0]["solution"]["steps"][-1]["expression"] == "2*x"
    assert "error" in entries[1]


def test_squared_function_notation():
    assert solve_expression("d/dx(sin^2(x))").result == "2*sin(x)*cos(x)"
    assert solve_expression("sin^2(x) + cos^2(x)").result == "1"


def test_two_sided_limit_must_agree():
    with pytest.raises(SolveError, match="Failed to evaluate limit"):
        solve_expression("limit(1/x, x, 0)")


def test_lim_shorthand():
    sol = solve_expression("lim(x^2, x, 1)")
    assert sol.type == "Limit"
    assert sol.result == "1"


def test_definite_integral_across_singularity():
    with pytest.raises(SolveError, match="Failed to compute integral"):
        solve_expression("integral(1/x, x, -1, 1)")


def test_greek_names_are_single_symbols():
    assert solve_expression("d/dx(x*theta)").result == "theta"


def test_python_syntax_is_rejected():
    with pytest.raises(SolveError, match="Failed to compute derivative"):
        solve_expression("d/dx(x.__class__)")
