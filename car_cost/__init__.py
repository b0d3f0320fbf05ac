"""
Car Cost Comparison - total cost of owning several cars over distance driven.

A Python package for sampling each car's purchase-plus-fuel cost curve and
finding the distances at which two cars have cost the same.
"""

import logging

from .calculator import CostCalculator, break_even_points, cost_curves
from .garage import Garage
from .loader import CarLoader
from .models import BreakEven, Car, ComparisonResult, FuelPrices, FuelType

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"
__all__ = [
    "CostCalculator", "CarLoader", "Garage", "Car", "FuelType", "FuelPrices",
    "BreakEven", "ComparisonResult", "cost_curves", "break_even_points",
]
