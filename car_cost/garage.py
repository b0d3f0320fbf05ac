"""
Editable car table state.
Every edit returns a new Garage; existing instances are never changed.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Iterator, Tuple

from .models import Car

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Garage:
    """Ordered, index-addressable list of cars with at least one entry."""

    cars: Tuple[Car, ...] = field(default_factory=lambda: (Car(),))

    def __post_init__(self):
        if not self.cars:
            object.__setattr__(self, 'cars', (Car(),))
        elif not isinstance(self.cars, tuple):
            object.__setattr__(self, 'cars', tuple(self.cars))

    def __len__(self) -> int:
        return len(self.cars)

    def __iter__(self) -> Iterator[Car]:
        return iter(self.cars)

    def __getitem__(self, index: int) -> Car:
        return self.cars[index]

    @property
    def can_remove(self) -> bool:
        return len(self.cars) > 1

    def add_car(self) -> "Garage":
        """Append a default car."""
        return Garage(self.cars + (Car(),))

    def update_car(self, index: int, **fields: Any) -> "Garage":
        """
        Replace one car with a copy carrying the given raw field values.

        Args:
            index: Row to edit
            **fields: name, buy_price, liters_per_100km and/or fuel_type

        Returns:
            New Garage with the edited row
        """
        car = self._row(index)
        for name, value in fields.items():
            car = car.with_field(name, value)
        return Garage(self.cars[:index] + (car,) + self.cars[index + 1:])

    def remove_car(self, index: int) -> "Garage":
        """Drop a row. The last remaining car cannot be removed."""
        self._row(index)
        if not self.can_remove:
            logger.warning("Refusing to remove the only car in the table")
            return self
        return Garage(self.cars[:index] + self.cars[index + 1:])

    def _row(self, index: int) -> Car:
        if not 0 <= index < len(self.cars):
            raise IndexError(f"No car at row {index}")
        return self.cars[index]
