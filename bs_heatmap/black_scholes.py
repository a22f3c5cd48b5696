"""
Black-Scholes closed-form pricing for European calls and puts.

The pricer is a pure function of (option type, S, K, T, r, sigma).
It does not validate its inputs: T = 0, sigma = 0 or non-positive
S / K give NaN or +/-inf, which is passed straight back to the caller.
Use validate_inputs (or PricingInput.validate) to fail fast instead.

All functions accept numpy arrays and broadcast, so a whole
spot x vol grid can be priced in one call. Scalar in -> float out.

References:
    Black, F. & Scholes, M. (1973). The Pricing of Options and Corporate Liabilities.
    Hull, J.C. (2018). Options, Futures, and Other Derivatives. 10th ed.
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Union

import numpy as np
from scipy.special import erf

from . import config


ArrayLike = Union[float, np.ndarray]


class InvalidInputError(ValueError):
    """Raised by validate_inputs when a pricing input is out of domain."""

    def __init__(self, problems):
        self.problems = list(problems)
        super().__init__("Invalid pricing input: " + "; ".join(self.problems))


class OptionType(Enum):
    CALL = "call"
    PUT = "put"

    @property
    def label(self) -> str:
        """'Call' / 'Put', as shown in titles."""
        return self.value.capitalize()

    @classmethod
    def parse(cls, value) -> "OptionType":
        """
        Coerce an OptionType, a bool (True = call) or a string
        ('call', 'c', 'put', 'p', any case) into an OptionType.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, (bool, np.bool_)):
            return cls.CALL if value else cls.PUT
        if isinstance(value, str):
            key = value.strip().lower()
            if key in ("c", "call"):
                return cls.CALL
            if key in ("p", "put"):
                return cls.PUT
        raise ValueError(f"Unknown option_type: {value!r}. Use 'call' or 'put'.")


# ════════════════════════════════════════════════════════════════════════
#  PRICING
# ════════════════════════════════════════════════════════════════════════

def _scalar_or_array(x: np.ndarray) -> ArrayLike:
    return float(x) if np.ndim(x) == 0 else x


def norm_cdf(x: ArrayLike) -> ArrayLike:
    """Standard normal CDF via the error function: 0.5 * (1 + erf(x / sqrt(2)))."""
    x = np.asarray(x, dtype=np.float64)
    return _scalar_or_array(0.5 * (1.0 + erf(x / np.sqrt(2.0))))


def d1(S: ArrayLike, K: ArrayLike, T: ArrayLike, r: ArrayLike, sigma: ArrayLike) -> ArrayLike:
    """
    Compute d1 in the Black-Scholes formula.

    Parameters
    ----------
    S : spot price
    K : strike price
    T : time to expiry in years
    r : risk-free rate (annualized, continuous compounding)
    sigma : volatility (annualized)

    Returns
    -------
    float or ndarray (NaN / inf for degenerate inputs)
    """
    S, K, T, r, sigma = (np.asarray(v, dtype=np.float64) for v in (S, K, T, r, sigma))
    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        out = (np.log(S / K) + (r + 0.5 * sigma**2) * T) / (sigma * np.sqrt(T))
    return _scalar_or_array(out)


def d2(S: ArrayLike, K: ArrayLike, T: ArrayLike, r: ArrayLike, sigma: ArrayLike) -> ArrayLike:
    """Compute d2 = d1 - sigma * sqrt(T)."""
    sigma = np.asarray(sigma, dtype=np.float64)
    T = np.asarray(T, dtype=np.float64)
    with np.errstate(invalid="ignore"):
        out = np.asarray(d1(S, K, T, r, sigma)) - sigma * np.sqrt(T)
    return _scalar_or_array(out)


def bs_price(option_type, S: ArrayLike, K: ArrayLike, T: ArrayLike,
             r: ArrayLike, sigma: ArrayLike) -> ArrayLike:
    """
    European option price under Black-Scholes.

        call = S * N(d1) - K * e^{-rT} * N(d2)
        put  = K * e^{-rT} * N(-d2) - S * N(-d1)

    Parameters
    ----------
    option_type : OptionType, bool (True = call) or 'call' / 'put'
    S, K, T, r, sigma : scalars or broadcastable arrays

    Returns
    -------
    float for scalar inputs, ndarray otherwise. Degenerate inputs
    (T or sigma = 0, S or K <= 0) propagate as NaN / inf.
    """
    kind = OptionType.parse(option_type)
    S, K, T, r, sigma = (np.asarray(v, dtype=np.float64) for v in (S, K, T, r, sigma))

    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        _d1 = np.asarray(d1(S, K, T, r, sigma))
        _d2 = _d1 - sigma * np.sqrt(T)
        discounted_strike = K * np.exp(-r * T)

        if kind is OptionType.CALL:
            value = S * norm_cdf(_d1) - discounted_strike * norm_cdf(_d2)
        else:
            value = discounted_strike * norm_cdf(-_d2) - S * norm_cdf(-_d1)

    return _scalar_or_array(np.asarray(value))


# ════════════════════════════════════════════════════════════════════════
#  INPUTS
# ════════════════════════════════════════════════════════════════════════

def validate_inputs(spot: float, strike: float, maturity: float,
                    rate: float, volatility: float) -> None:
    """
    Reject inputs for which the closed form is undefined.

    Spot, strike, maturity and volatility must be finite and > 0;
    the rate may be any finite number (negative rates are fine).

    Raises
    ------
    InvalidInputError : listing every offending field
    """
    problems = []
    for name, value in (("spot", spot), ("strike", strike),
                        ("maturity", maturity), ("volatility", volatility)):
        if not math.isfinite(value) or value <= 0:
            problems.append(f"{name} must be a positive number, got {value}")
    if not math.isfinite(rate):
        problems.append(f"rate must be finite, got {rate}")
    if problems:
        raise InvalidInputError(problems)


@dataclass(frozen=True)
class PricingInput:
    """One immutable set of pricing inputs, passed by value to each computation."""

    option_type: OptionType = OptionType(config.DEFAULT_OPTION_TYPE)
    spot: float = config.DEFAULT_SPOT
    strike: float = config.DEFAULT_STRIKE
    maturity: float = config.DEFAULT_MATURITY
    rate: float = config.DEFAULT_RATE
    volatility: float = config.DEFAULT_VOLATILITY

    def __post_init__(self):
        # frozen, so normalise through object.__setattr__
        object.__setattr__(self, "option_type", OptionType.parse(self.option_type))
        for name in ("spot", "strike", "maturity", "rate", "volatility"):
            object.__setattr__(self, name, float(getattr(self, name)))

    @property
    def is_call(self) -> bool:
        return self.option_type is OptionType.CALL

    def validate(self) -> "PricingInput":
        """Raise InvalidInputError if out of domain, else return self."""
        validate_inputs(self.spot, self.strike, self.maturity, self.rate, self.volatility)
        return self


def price(inp: PricingInput) -> float:
    """Price a PricingInput. No validation, see module docstring."""
    return bs_price(inp.option_type, inp.spot, inp.strike, inp.maturity,
                    inp.rate, inp.volatility)
