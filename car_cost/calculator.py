"""
Car cost calculator - core calculation engine.
Evaluates the linear total-cost model over a distance grid and solves for
the distances where two cars' cost lines cross.
"""

import logging
import math
from typing import List, Optional, Sequence

import numpy as np

from .config import DEFAULT_MAX_DISTANCE_KM, DEFAULT_STEP_KM, Settings
from .models import BreakEven, Car, ComparisonResult, CostCurve, CostSample, FuelPrices, FuelType

logger = logging.getLogger(__name__)

NO_CAR_LABEL = "No car"


def fuel_price(fuel_type: FuelType, prices: FuelPrices) -> float:
    """Price per liter for the car's fuel type."""
    return prices.price_for(fuel_type)


def cost_rate(car: Car, prices: FuelPrices) -> float:
    """Fuel spend per 100 km."""
    return car.liters_per_100km * fuel_price(car.fuel_type, prices)


def total_cost(car: Car, prices: FuelPrices, distance_km: float) -> float:
    """Purchase price plus fuel spend after driving distance_km."""
    return car.buy_price + (distance_km / 100) * cost_rate(car, prices)


def curve_label(car: Car) -> str:
    """Legend label used on the cost plot."""
    return car.name if car.name else NO_CAR_LABEL


def break_even_label(car: Car, index: int) -> str:
    """Label used in break-even lines, numbered from 1 by table position."""
    return car.name if car.name else f"Car {index + 1}"


def distance_grid(max_distance_km: int = DEFAULT_MAX_DISTANCE_KM,
                  step_km: int = DEFAULT_STEP_KM) -> np.ndarray:
    """
    Sampling points from 0 to max_distance_km, both ends included.

    Args:
        max_distance_km: Upper bound of the range
        step_km: Distance between samples

    Returns:
        Integer array of floor(max_distance_km / step_km) + 1 distances
    """
    if step_km <= 0:
        raise ValueError(f"step_km must be positive, got {step_km}")
    count = int(max_distance_km // step_km) + 1
    return np.arange(count, dtype=np.int64) * step_km


def cost_curves(
    cars: Sequence[Car],
    prices: FuelPrices,
    max_distance_km: int = DEFAULT_MAX_DISTANCE_KM,
    step_km: int = DEFAULT_STEP_KM,
) -> List[CostCurve]:
    """
    Sample every car's total cost over the distance grid.

    Args:
        cars: Cars in table order
        prices: Current fuel prices
        max_distance_km: Upper bound of the range
        step_km: Distance between samples

    Returns:
        One CostCurve per car, in the same order
    """
    grid = distance_grid(max_distance_km, step_km)
    curves = []
    for idx, car in enumerate(cars):
        costs = car.buy_price + (grid / 100) * cost_rate(car, prices)
        points = tuple(zip(grid.tolist(), costs.tolist()))
        curves.append(CostCurve(car_index=idx, label=curve_label(car), points=points))
    return curves


def cost_samples(
    cars: Sequence[Car],
    prices: FuelPrices,
    max_distance_km: int = DEFAULT_MAX_DISTANCE_KM,
    step_km: int = DEFAULT_STEP_KM,
) -> List[CostSample]:
    """Same data as cost_curves, one record per distance instead of per car."""
    grid = distance_grid(max_distance_km, step_km)
    return _samples_from_curves(grid, cost_curves(cars, prices, max_distance_km, step_km))


def _samples_from_curves(grid: np.ndarray, curves: Sequence[CostCurve]) -> List[CostSample]:
    samples = []
    for pos, distance in enumerate(grid.tolist()):
        samples.append(CostSample(
            distance_km=distance,
            costs={curve.car_index: curve.points[pos][1] for curve in curves},
        ))
    return samples


def break_even_points(
    cars: Sequence[Car],
    prices: FuelPrices,
    max_distance_km: int = DEFAULT_MAX_DISTANCE_KM,
) -> List[BreakEven]:
    """
    Find where each pair of cars' cost lines cross inside (0, max_distance_km).

    Pairs with equal cost rates never cross (or always coincide) and are
    skipped, as are crossings outside the window.

    Args:
        cars: Cars in table order; order decides the "Car N" labels
        prices: Current fuel prices
        max_distance_km: Exclusive upper bound for accepted crossings

    Returns:
        BreakEven records in pair order (0, 1), (0, 2), ..., (1, 2), ...
    """
    results = []
    for i in range(len(cars)):
        for j in range(i + 1, len(cars)):
            car_a, car_b = cars[i], cars[j]
            denom = cost_rate(car_a, prices) - cost_rate(car_b, prices)
            if denom == 0:
                continue
            km = ((car_b.buy_price - car_a.buy_price) / denom) * 100
            if 0 < km < max_distance_km:
                results.append(BreakEven(
                    car_a=break_even_label(car_a, i),
                    car_b=break_even_label(car_b, j),
                    distance_km=int(math.floor(km + 0.5)),
                ))
    return results


class CostCalculator:
    """Compute cost curves and break-even points for a set of cars."""

    def __init__(self, settings: Optional[Settings] = None):
        """
        Initialize calculator.

        Args:
            settings: Sampling range and default prices; library defaults if omitted
        """
        self.settings = settings or Settings()

    def default_prices(self) -> FuelPrices:
        return FuelPrices(petrol=self.settings.petrol_price, diesel=self.settings.diesel_price)

    def calculate(self, cars: Sequence[Car], prices: Optional[FuelPrices] = None) -> ComparisonResult:
        """
        Recompute everything for the given snapshot of the car table.

        Args:
            cars: Cars in table order
            prices: Fuel prices; the configured defaults if omitted

        Returns:
            ComparisonResult with curves, samples and break-even points
        """
        prices = prices or self.default_prices()
        max_km = self.settings.max_distance_km
        step = self.settings.step_km

        curves = cost_curves(cars, prices, max_km, step)
        samples = _samples_from_curves(distance_grid(max_km, step), curves)
        break_evens = break_even_points(cars, prices, max_km)
        logger.debug("Computed %d curves and %d break-even points for %d cars",
                     len(curves), len(break_evens), len(cars))

        return ComparisonResult(
            cars=list(cars),
            prices=prices,
            curves=curves,
            samples=samples,
            break_evens=break_evens,
        )
