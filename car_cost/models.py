"""
Data models for car cost comparisons.
"""

import logging
import math
import re
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, List, Tuple

import pandas as pd

from .config import DEFAULT_DIESEL_PRICE, DEFAULT_PETROL_PRICE

logger = logging.getLogger(__name__)

# Leading decimal number, the way a browser number field parses its text
_LEADING_NUMBER = re.compile(r'^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)')


def coerce_number(value: Any) -> float:
    """
    Turn a raw form value into a float.

    Empty, missing or non-numeric input becomes 0.0. Text that starts with a
    number keeps that number ("12abc" -> 12.0). Infinity is also turned into
    0.0 on purpose, unlike a browser number field, so a cost curve always
    stays finite and plottable.

    Args:
        value: Anything a form or spreadsheet cell may hold

    Returns:
        The numeric value, or 0.0
    """
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        match = _LEADING_NUMBER.match(str(value))
        if not match:
            return 0.0
        number = float(match.group(1))
    if math.isnan(number) or math.isinf(number):
        return 0.0
    return number


class FuelType(Enum):
    PETROL = "petrol"
    DIESEL = "diesel"

    @property
    def label(self) -> str:
        return self.value.capitalize()

    @classmethod
    def parse(cls, value: Any) -> "FuelType":
        """
        Case-insensitive lookup, falling back to petrol.

        Anything unrecognised becomes petrol, the default of a new row. The
        browser page this replaces priced any non-petrol value as diesel.
        """
        if isinstance(value, cls):
            return value
        text = str(value).strip().lower() if value is not None else ""
        for fuel in cls:
            if text == fuel.value:
                return fuel
        if text:
            logger.warning("Unknown fuel type %r, treating as petrol", value)
        return cls.PETROL


@dataclass(frozen=True)
class Car:
    """One row of the car table."""

    name: str = ""
    buy_price: float = 0.0
    liters_per_100km: float = 0.0
    fuel_type: FuelType = FuelType.PETROL

    @classmethod
    def from_form(cls, name: Any = "", buy_price: Any = "",
                  liters_per_100km: Any = "", fuel_type: Any = FuelType.PETROL) -> "Car":
        """Build a car from raw form values, coercing numbers to 0 where needed."""
        return cls(
            name="" if name is None else str(name),
            buy_price=coerce_number(buy_price),
            liters_per_100km=coerce_number(liters_per_100km),
            fuel_type=FuelType.parse(fuel_type),
        )

    def with_field(self, field_name: str, value: Any) -> "Car":
        """Return a copy with one field replaced by a coerced raw value."""
        if field_name == 'name':
            return replace(self, name="" if value is None else str(value))
        if field_name in ('buy_price', 'liters_per_100km'):
            return replace(self, **{field_name: coerce_number(value)})
        if field_name == 'fuel_type':
            return replace(self, fuel_type=FuelType.parse(value))
        raise TypeError(f"Car has no field '{field_name}'")


@dataclass(frozen=True)
class FuelPrices:
    """Price per liter for each fuel type."""

    petrol: float = DEFAULT_PETROL_PRICE
    diesel: float = DEFAULT_DIESEL_PRICE

    def price_for(self, fuel_type: FuelType) -> float:
        return self.petrol if fuel_type is FuelType.PETROL else self.diesel


@dataclass(frozen=True)
class CostSample:
    """Total cost of every car at one distance."""

    distance_km: int
    costs: Dict[int, float]


@dataclass(frozen=True)
class CostCurve:
    """Sampled cost-vs-distance line for a single car."""

    car_index: int
    label: str
    points: Tuple[Tuple[int, float], ...]

    @property
    def distances(self) -> List[int]:
        return [d for d, _ in self.points]

    @property
    def costs(self) -> List[float]:
        return [c for _, c in self.points]


@dataclass(frozen=True)
class BreakEven:
    """Distance at which two cars have spent the same in total."""

    car_a: str
    car_b: str
    distance_km: int

    def describe(self) -> str:
        return f"{self.car_a} and {self.car_b} break even at {self.distance_km:,} km"


@dataclass
class ComparisonResult:
    """Everything computed for one snapshot of the car table."""

    cars: List[Car]
    prices: FuelPrices
    curves: List[CostCurve] = field(default_factory=list)
    samples: List[CostSample] = field(default_factory=list)
    break_evens: List[BreakEven] = field(default_factory=list)

    def to_dataframe(self) -> pd.DataFrame:
        """One column per car, indexed by distance in km."""
        data = {}
        for curve in self.curves:
            # Legend labels can repeat ("No car"), so prefix the row number
            data[f"{curve.car_index + 1}: {curve.label}"] = curve.costs
        index = [s.distance_km for s in self.samples]
        df = pd.DataFrame(data, index=pd.Index(index, name='Kilometers Driven'))
        return df

    def summary(self) -> Dict:
        """Return summary of the comparison."""
        return {
            'Cars': len(self.cars),
            'Petrol Price': self.prices.petrol,
            'Diesel Price': self.prices.diesel,
            'Samples': len(self.samples),
            'Break-even Points': [be.describe() for be in self.break_evens],
        }
