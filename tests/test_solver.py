"""
volatility solver, step 5 of http://www.glicko.net/glicko/glicko2.pdf
"""
import math
import logging
import pytest
from glickorate.core.exceptions import ConvergenceError
from glickorate.core import solver
from glickorate.core.solver import volatility_objective, solve_log_volatility

EXAMPLE = {'delta': -0.4834, 'v': 1.7785, 'phi': 1.1513, 'sigma': 0.06}


def objective_at(x, delta, v, phi, sigma, tau=0.5):
    return volatility_objective(x, delta**2.0, phi**2.0, v, math.log(sigma**2.0), tau**2.0)


def test_example_volatility():
    A = solve_log_volatility(**EXAMPLE)
    assert math.exp(A / 2.0) == pytest.approx(0.05999, abs=1e-5)
    assert objective_at(A, **EXAMPLE) == pytest.approx(0.0, abs=1e-4)


@pytest.mark.parametrize(
    'delta, v, phi, sigma',
    [
        (-0.4834, 1.7785, 1.1513, 0.06),
        (3.0, 1.5, 0.5, 0.06),  # delta^2 > phi^2 + v, bracket from log(delta^2 - phi^2 - v)
        (0.0, 2.0, 0.3, 0.06),
        (0.2, 0.4, 2.0, 0.2),
        (-5.0, 10.0, 0.05, 0.01),
    ],
)
def test_root_is_found(delta, v, phi, sigma):
    A = solve_log_volatility(delta=delta, v=v, phi=phi, sigma=sigma)
    assert objective_at(A, delta, v, phi, sigma) == pytest.approx(0.0, abs=1e-4)
    assert math.exp(A / 2.0) > 0.0


def test_bracket_search_steps_down_more_than_once():
    # f(a - tau) < 0 here so the lower bound needs a second step
    params = {'delta': 0.0, 'v': 0.1, 'phi': 0.1, 'sigma': 100.0}
    assert objective_at(math.log(100.0**2.0) - 3.0, tau=3.0, **params) < 0.0
    A = solve_log_volatility(tau=3.0, **params)
    assert objective_at(A, tau=3.0, **params) == pytest.approx(0.0, abs=1e-4)


def test_bracket_search_cap_raises():
    with pytest.raises(ConvergenceError) as excinfo:
        solve_log_volatility(delta=0.0, v=0.1, phi=0.1, sigma=100.0, tau=3.0, max_iterations=1)
    assert excinfo.value.iterations == 1


def test_iteration_cap_raises():
    with pytest.raises(ConvergenceError) as excinfo:
        solve_log_volatility(max_iterations=1, **EXAMPLE)
    A, B = excinfo.value.bracket
    assert math.fabs(A - B) > 1e-6


def test_tighter_epsilon_gets_closer():
    loose = solve_log_volatility(epsilon=1e-2, **EXAMPLE)
    tight = solve_log_volatility(epsilon=1e-10, **EXAMPLE)
    assert math.fabs(objective_at(tight, **EXAMPLE)) <= math.fabs(objective_at(loose, **EXAMPLE))


def test_objective_is_zero_change_penalty_at_a():
    # at x = a only the first term is left
    delta2, phi2, v = 0.25, 1.0, 2.0
    a = math.log(0.06**2.0)
    ex = math.exp(a)
    expected = ex * (delta2 - phi2 - v - ex) / (2.0 * (phi2 + v + ex) ** 2.0)
    assert volatility_objective(a, delta2, phi2, v, a, 0.25) == pytest.approx(expected)


def test_convergence_is_logged(caplog):
    with caplog.at_level(logging.DEBUG, logger='glickorate.core.solver'):
        solve_log_volatility(**EXAMPLE)
    assert 'converged' in caplog.text


@pytest.mark.parametrize(
    'delta, v',
    [
        (1e200, 1.0),  # delta^2 overflows
        (1e100, 1.0),  # delta^2 is finite but f(B) overflows
        (float('inf'), 1.0),
        (0.5, float('inf')),
    ],
)
def test_overflow_raises_convergence_error(delta, v):
    with pytest.raises(ConvergenceError):
        solve_log_volatility(delta=delta, v=v, phi=1.0, sigma=0.06)


def test_flat_secant_raises(monkeypatch):
    monkeypatch.setattr(solver, 'volatility_objective', lambda *args: 1.0)
    with pytest.raises(ConvergenceError, match='flat secant'):
        solve_log_volatility(**EXAMPLE)


def test_non_finite_step_raises(monkeypatch):
    # lower bound check, f(A), f(B), then f(C)
    values = iter([1.0, -1.0, 1.0, float('nan')])
    monkeypatch.setattr(solver, 'volatility_objective', lambda *args: next(values))
    with pytest.raises(ConvergenceError, match='not finite') as excinfo:
        solve_log_volatility(**EXAMPLE)
    assert excinfo.value.iterations == 0
