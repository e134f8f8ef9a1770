"""Curve implementations.

Importing this package registers every curve kind with the registry in
``amm_sdk.curves.base``.
"""

from amm_sdk.curves.base import Curve, CurveId, SwapParams, get_curve, register_curve
from amm_sdk.curves.constant_product import ConstantProductCurve, constant_product
from amm_sdk.curves.stable import StableCurve, stable
from amm_sdk.curves.stable_math import compute_liquidity, get_y, marginal_price

__all__ = [
    "Curve",
    "CurveId",
    "SwapParams",
    "get_curve",
    "register_curve",
    # Constant product
    "ConstantProductCurve",
    "constant_product",
    # Stable
    "StableCurve",
    "stable",
    "compute_liquidity",
    "get_y",
    "marginal_price",
]
