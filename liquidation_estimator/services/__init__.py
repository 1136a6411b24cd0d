"""Service modules"""
from .estimator import LiquidationEstimator

__all__ = ["LiquidationEstimator"]
