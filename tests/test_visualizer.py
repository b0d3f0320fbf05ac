import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt
import pytest

from car_cost.calculator import CostCalculator
from car_cost.models import Car, FuelPrices
from car_cost.visualizer import CostVisualizer, break_even_lines, car_color


def test_car_color_hue_steps_by_sixty_degrees():
    assert car_color(0) == pytest.approx((0.85, 0.15, 0.15))
    assert car_color(2) == pytest.approx((0.15, 0.85, 0.15))
    assert car_color(6) == car_color(0)


def test_plot_has_one_line_per_car():
    cars = [Car(name="Golf", buy_price=20000, liters_per_100km=5), Car()]
    result = CostCalculator().calculate(cars, FuelPrices())
    fig = CostVisualizer.plot_costs(result, show=False)
    try:
        ax = fig.axes[0]
        assert len(ax.get_lines()) == 2
        assert [line.get_label() for line in ax.get_lines()] == ["Golf", "No car"]
        assert ax.get_title() == "Total Cost vs. Kilometers Driven"
        assert ax.get_lines()[0].get_xdata()[-1] == 100000
    finally:
        plt.close(fig)


def test_break_even_lines():
    cars = [
        Car(buy_price=17000, liters_per_100km=8),
        Car(name="Saver", buy_price=20000, liters_per_100km=4),
    ]
    result = CostCalculator().calculate(cars, FuelPrices(petrol=1.0, diesel=1.0))
    assert break_even_lines(result) == ["Car 1 and Saver break even at 75,000 km"]


def test_no_break_even_lines_for_single_car():
    result = CostCalculator().calculate([Car(buy_price=1)], FuelPrices())
    assert break_even_lines(result) == []
