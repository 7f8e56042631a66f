"""
Volatility solver for Glicko 2 (step 5 of http://www.glicko.net/glicko/glicko2.pdf)

Finds the root of the volatility profile function with the Illinois variant of regula falsi.
"""
import math
import logging
from glickorate.core.exceptions import ConvergenceError
from glickorate.utils.constants import DEFAULT_TAU, DEFAULT_EPSILON, DEFAULT_MAX_ITERATIONS

logger = logging.getLogger(__name__)


def volatility_objective(x, delta2, phi2, v, a, tau2):
    """f(x) from the paper, its root is ln(sigma'^2)"""
    ex = math.exp(x)
    phi2_v_ex = phi2 + v + ex
    num_1 = ex * (delta2 - phi2_v_ex)
    denom_1 = 2.0 * (phi2_v_ex**2.0)
    term_2 = (x - a) / tau2
    return (num_1 / denom_1) - term_2


def _evaluate(x, delta2, phi2, v, a, tau2, iterations, bracket):
    """f(x), raising ConvergenceError instead of overflowing or going non-finite"""
    try:
        f_x = volatility_objective(x, delta2, phi2, v, a, tau2)
    except OverflowError as err:
        raise ConvergenceError(
            f'volatility objective overflowed at x={x}', iterations=iterations, bracket=bracket
        ) from err
    if not (math.isfinite(x) and math.isfinite(f_x)):
        raise ConvergenceError(
            f'volatility objective is not finite at x={x}, f(x)={f_x}', iterations=iterations, bracket=bracket
        )
    return f_x


def _find_lower_bound(delta2, phi2, v, a, tau, tau2, max_iterations):
    """step down from a by tau until f changes sign"""
    B = a - tau
    steps = 0
    while _evaluate(B, delta2, phi2, v, a, tau2, steps, (a, B)) < 0.0:
        steps += 1
        if steps >= max_iterations:
            logger.warning(f'volatility bracket search gave up after {steps} steps at B={B}')
            raise ConvergenceError(
                f'could not bracket the volatility root within {max_iterations} steps',
                iterations=steps,
                bracket=(a, B),
            )
        B -= tau
    return B


def solve_log_volatility(
    delta,
    v,
    phi,
    sigma,
    tau: float = DEFAULT_TAU,
    epsilon: float = DEFAULT_EPSILON,
    max_iterations: int = DEFAULT_MAX_ITERATIONS,
):
    """
    Solves for A = ln(sigma'^2), the new log squared volatility.

    Parameters:
        delta (float): Estimated improvement in rating from the period's outcomes.
        v (float): Estimated variance of the rating based only on the period's outcomes.
        phi (float): Current deviation on the glicko 2 scale.
        sigma (float): Current volatility.
        tau (float, optional): System constant constraining the volatility change. Defaults to 0.5.
        epsilon (float, optional): Stop once the bracket is narrower than this. Defaults to 1e-6.
        max_iterations (int, optional): Cap for both the bracket search and the main loop. Defaults to 100.

    Returns:
        float: the left endpoint A of the final bracket, exp(A / 2) is the new volatility

    Raises:
        ConvergenceError: if either loop hits max_iterations, a step becomes degenerate, or any
            intermediate value overflows
    """
    try:
        delta2 = delta**2.0
        phi2 = phi**2.0
    except OverflowError as err:
        raise ConvergenceError(f'delta={delta} is too large to square', iterations=0) from err
    if not (math.isfinite(delta2) and math.isfinite(v)):
        raise ConvergenceError(f'non-finite solver inputs delta^2={delta2}, v={v}', iterations=0)
    tau2 = tau**2.0
    A = a = math.log(sigma**2.0)

    b_test = delta2 - phi2 - v
    if b_test > 0.0:
        B = math.log(b_test)
    else:
        B = _find_lower_bound(delta2, phi2, v, a, tau, tau2, max_iterations)

    f_A = _evaluate(A, delta2, phi2, v, a, tau2, 0, (A, B))
    f_B = _evaluate(B, delta2, phi2, v, a, tau2, 0, (A, B))
    iterations = 0
    while math.fabs(B - A) > epsilon:
        if iterations >= max_iterations:
            logger.warning(f'volatility solver stopped after {iterations} iterations with bracket ({A}, {B})')
            raise ConvergenceError(
                f'volatility solver did not converge within {max_iterations} iterations',
                iterations=iterations,
                bracket=(A, B),
            )
        if f_B == f_A:
            raise ConvergenceError(
                'volatility solver hit a flat secant step',
                iterations=iterations,
                bracket=(A, B),
            )
        C = A + ((A - B) * f_A) / (f_B - f_A)
        f_C = _evaluate(C, delta2, phi2, v, a, tau2, iterations, (A, B))
        if (f_C * f_B) < 0.0:
            A = B
            f_A = f_B
        else:
            # illinois modification, keeps the retained endpoint from stalling
            f_A = f_A / 2.0
        B = C
        f_B = f_C
        iterations += 1

    logger.debug(f'volatility solver converged in {iterations} iterations')
    return A
