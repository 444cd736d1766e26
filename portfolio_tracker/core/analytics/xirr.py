"""
XIRR solver.

Annualized internal rate of return over irregularly dated cash flows.
Newton-Raphson runs first; if it aborts or does not converge, a bracketing
bisection takes over. Each stage is a pure function usable on its own.
"""

import math
from collections.abc import Sequence
from dataclasses import dataclass

from loguru import logger

from portfolio_tracker.core.constants import (
    BISECTION_HIGH,
    BISECTION_LOW,
    BISECTION_MAX_EXPANSIONS,
    BISECTION_MAX_ITERATIONS,
    BISECTION_MIN_WIDTH,
    DAYS_PER_YEAR,
    XIRR_DEFAULT_GUESS,
    XIRR_MAX_NEWTON_ITERATIONS,
    XIRR_MIN_STEP,
    XIRR_RATE_FLOOR,
    XIRR_TOLERANCE,
)
from portfolio_tracker.core.exceptions.portfolio import ConvergenceError, XirrValidationError
from portfolio_tracker.core.utils.dates import DateLike, calendar_date, days_between


@dataclass(frozen=True)
class CashFlow:
    """A dated amount; negative amounts are paid out, positive received."""

    date: DateLike
    amount: float


def _year_fractions(cashflows: Sequence[CashFlow]) -> list[tuple[float, float]]:
    """(years since the earliest flow, amount) for every flow."""
    t0 = min(calendar_date(cf.date) for cf in cashflows)
    return [(days_between(t0, cf.date) / DAYS_PER_YEAR, cf.amount) for cf in cashflows]


def _growth(rate: float, years: float) -> float:
    """(1 + rate) ** years, saturating to +inf instead of overflowing."""
    try:
        return math.pow(1 + rate, years)
    except OverflowError:
        return math.inf


def _discount(amount: float, growth: float) -> float:
    """amount / growth, signed infinity when the growth factor underflowed to zero."""
    if growth == 0:
        return math.copysign(math.inf, amount) if amount else 0.0
    return amount / growth


def xnpv(rate: float, cashflows: Sequence[CashFlow]) -> float:
    """Net present value at rate; +inf when rate <= -1."""
    if rate <= -1:
        return math.inf
    return sum(_discount(amount, _growth(rate, t)) for t, amount in _year_fractions(cashflows))


def xnpv_derivative(rate: float, cashflows: Sequence[CashFlow]) -> float:
    """d XNPV / d rate; +inf when rate <= -1."""
    if rate <= -1:
        return math.inf
    return sum(
        _discount(-t * amount, _growth(rate, t + 1)) for t, amount in _year_fractions(cashflows)
    )


def validate_cashflows(cashflows: Sequence[CashFlow]) -> None:
    """Check that a root can exist.

    Raises:
        XirrValidationError: With fewer than two flows or without both a
            strictly positive and a strictly negative amount
    """
    if len(cashflows) < 2:
        raise XirrValidationError("need at least 2 cash flows", len(cashflows))
    has_positive = any(cf.amount > 0 for cf in cashflows)
    has_negative = any(cf.amount < 0 for cf in cashflows)
    if not has_positive or not has_negative:
        raise XirrValidationError(
            "need at least one positive and one negative cash flow", len(cashflows)
        )


def newton_xirr(
    cashflows: Sequence[CashFlow],
    guess: float = XIRR_DEFAULT_GUESS,
    max_iterations: int = XIRR_MAX_NEWTON_ITERATIONS,
    tolerance: float = XIRR_TOLERANCE,
) -> float | None:
    """Newton-Raphson stage.

    Returns the rate on convergence, or None when the stage aborts (zero or
    non-finite derivative, a step leaving the domain) or runs out of
    iterations.
    """
    rate = guess
    for iteration in range(max_iterations):
        value = xnpv(rate, cashflows)
        if abs(value) < tolerance:
            return rate

        derivative = xnpv_derivative(rate, cashflows)
        if not math.isfinite(derivative) or derivative == 0:
            logger.debug(f"Newton aborted at iteration {iteration}: derivative {derivative}")
            return None

        next_rate = rate - value / derivative
        if not math.isfinite(next_rate) or next_rate <= XIRR_RATE_FLOOR:
            logger.debug(f"Newton aborted at iteration {iteration}: step to {next_rate}")
            return None

        if abs(next_rate - rate) < XIRR_MIN_STEP:
            return next_rate
        rate = next_rate

    logger.debug(f"Newton did not converge in {max_iterations} iterations")
    return None


def bisection_xirr(
    cashflows: Sequence[CashFlow],
    tolerance: float = XIRR_TOLERANCE,
    low: float = BISECTION_LOW,
    high: float = BISECTION_HIGH,
) -> float:
    """Bracketing bisection stage.

    The upper bound is doubled until XNPV changes sign between the bounds.
    An infinite XNPV at a bound still counts for its sign.

    Raises:
        ConvergenceError: If no sign change can be bracketed
    """
    f_low = xnpv(low, cashflows)
    f_high = xnpv(high, cashflows)

    expansions = 0
    while (
        not math.isnan(f_low)
        and not math.isnan(f_high)
        and f_low * f_high > 0
        and expansions < BISECTION_MAX_EXPANSIONS
    ):
        high *= 2
        f_high = xnpv(high, cashflows)
        expansions += 1

    if math.isnan(f_low) or math.isnan(f_high) or f_low * f_high > 0:
        raise ConvergenceError(
            f"Failed to bracket a root for XIRR in [{low}, {high}]", iterations=expansions
        )

    for _ in range(BISECTION_MAX_ITERATIONS):
        mid = (low + high) / 2
        f_mid = xnpv(mid, cashflows)
        if math.isnan(f_mid):
            raise ConvergenceError(f"XNPV is undefined at rate {mid}", iterations=expansions)

        if abs(f_mid) < tolerance:
            return mid

        if f_low * f_mid < 0:
            high, f_high = mid, f_mid
        else:
            low, f_low = mid, f_mid

        if abs(high - low) < BISECTION_MIN_WIDTH:
            return (low + high) / 2

    return (low + high) / 2


def xirr(
    cashflows: Sequence[CashFlow],
    guess: float = XIRR_DEFAULT_GUESS,
    max_newton_iterations: int = XIRR_MAX_NEWTON_ITERATIONS,
    tolerance: float = XIRR_TOLERANCE,
) -> float:
    """Annualized internal rate of return of dated cash flows.

    Args:
        cashflows: At least two flows with both signs present
        guess: Newton starting rate
        max_newton_iterations: Newton iteration budget
        tolerance: Absolute XNPV tolerance

    Returns:
        Rate r with XNPV(r) ~ 0, e.g. 0.1 for 10% p.a.

    Raises:
        XirrValidationError: If the flows cannot have a root
        ConvergenceError: If neither stage finds a root
    """
    validate_cashflows(cashflows)

    rate = newton_xirr(cashflows, guess, max_newton_iterations, tolerance)
    if rate is not None:
        return rate

    logger.debug("Falling back to bisection for XIRR")
    return bisection_xirr(cashflows, tolerance)
