"""
Visualization module for car cost comparisons.
"""

import colorsys
from typing import List, Tuple

import matplotlib.pyplot as plt

from .models import ComparisonResult


def car_color(index: int) -> Tuple[float, float, float]:
    """
    Line color for a table row: hue (index * 60) mod 360, 70% saturation, 50% lightness.

    Args:
        index: Zero-based row index

    Returns:
        RGB tuple with components in [0, 1]
    """
    hue = ((index * 60) % 360) / 360.0
    return colorsys.hls_to_rgb(hue, 0.5, 0.7)


def break_even_lines(result: ComparisonResult) -> List[str]:
    """Text lines for the break-even list, empty when no pair crosses."""
    return [be.describe() for be in result.break_evens]


class CostVisualizer:
    """Create visualizations for car cost comparisons."""

    @staticmethod
    def plot_costs(result: ComparisonResult, show: bool = True) -> plt.Figure:
        """
        Plot total cost against kilometers driven, one line per car.

        Args:
            result: ComparisonResult object
            show: Whether to display the plot

        Returns:
            Matplotlib figure
        """
        fig, ax = plt.subplots(figsize=(10, 5))
        for curve in result.curves:
            ax.plot(curve.distances, curve.costs, label=curve.label,
                    color=car_color(curve.car_index), linewidth=2)

        ax.set_title('Total Cost vs. Kilometers Driven')
        ax.set_xlabel('Kilometers Driven')
        ax.set_ylabel('Total Cost (€)')
        if result.curves:
            ax.legend(loc='upper center', bbox_to_anchor=(0.5, 1.0), ncol=min(len(result.curves), 4))
        ax.grid(True, alpha=0.3)
        ax.xaxis.set_major_formatter(plt.FuncFormatter(lambda x, p: f'{x:,.0f}'))
        ax.yaxis.set_major_formatter(plt.FuncFormatter(lambda x, p: f'€{x:,.0f}'))

        plt.tight_layout()
        if show:
            plt.show()

        return fig
