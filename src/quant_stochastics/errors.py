# src/quant_stochastics/errors.py
from __future__ import annotations


class QuantStochasticsError(Exception):
    """Base exception for the simulation library."""


class InvalidParameterError(QuantStochasticsError, ValueError):
    """Raised when a process or simulation parameter is out of its valid range."""


class NumericalInstabilityError(QuantStochasticsError, ArithmeticError):
    """
    Raised when a numerical step cannot produce a valid result, e.g. a
    covariance matrix that is not positive definite or a path that
    overflows to a non-finite value.
    """


__all__ = [
    "QuantStochasticsError",
    "InvalidParameterError",
    "NumericalInstabilityError",
]
