from core.steps import (
    derivative_steps,
    detect_integration_method,
    implicit_steps,
    integral_steps,
    needs_integration_by_parts,
    needs_substitution,
)


def test_derivative_steps_power_rule():
    steps = derivative_steps("x^3 + 1", "3*x^2")
    assert [s.step for s in steps] == ["1", "2", "3"]
    assert steps[0].expression == "d/dx(x^3 + 1)"
    assert steps[1].method == "Power Rule"
    assert steps[-1].expression == "3*x^2"


def test_derivative_steps_pick_at_most_one_rule():
    steps = derivative_steps("sin(x^2)", "2*x*cos(x^2)")
    assert len(steps) == 3
    assert steps[1].method == "Power Rule"

    steps = derivative_steps("cos(x)", "-sin(x)")
    assert steps[1].method == "Trigonometric Rules"


def test_derivative_steps_without_heuristic():
    steps = derivative_steps("5*x", "5")
    assert len(steps) == 2
    assert steps[-1].explanation == "Final derivative"


def test_integral_steps():
    steps = integral_steps("x^2", "x^3/3 + C")
    assert steps[0].expression == "∫ x^2 dx"
    assert steps[1].method == "Power Rule"
    assert steps[-1].expression == "x^3/3 + C"

    steps = integral_steps("x*e^x", "(x - 1)*exp(x) + C")
    assert steps[1].method == "Integration by Parts"


def test_integration_method_heuristics():
    assert needs_integration_by_parts("x*sin(x)")
    assert not needs_integration_by_parts("sin(t)")
    assert needs_substitution("sin(x^2)")
    assert detect_integration_method("x*sin(x)") == "Integration by Parts"
    assert detect_integration_method("sin(2*t)") == "U-Substitution"
    assert detect_integration_method("x^2 + 3x") == "Power Rule"


def test_implicit_steps():
    steps = implicit_steps("x^2 + y^2 = 25", "2*x + 2*y*dy/dx", "0", "-x/y")
    assert len(steps) == 4
    assert steps[1].expression == "d/dx(x^2 + y^2) = d/dx(25)"
    assert steps[-1].expression == "dy/dx = -x/y"
