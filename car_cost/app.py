"""
Car Cost Comparison - single page Streamlit app.

Run with `streamlit run car_cost/app.py` or the `car-cost` command.
"""

import logging
import sys
from pathlib import Path
from typing import IO, Optional, Tuple

import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt

import streamlit as st

from car_cost.calculator import CostCalculator
from car_cost.config import configure_logging, load_settings
from car_cost.garage import Garage
from car_cost.loader import CarLoader
from car_cost.models import FuelPrices, FuelType
from car_cost.visualizer import CostVisualizer, break_even_lines

logger = logging.getLogger(__name__)

FUEL_OPTIONS = [fuel.value for fuel in FuelType]


def _state() -> Garage:
    if 'garage' not in st.session_state:
        st.session_state.garage = Garage()
    if 'table_version' not in st.session_state:
        st.session_state.table_version = 0
    return st.session_state.garage


def _replace_garage(garage: Garage, structural: bool = False):
    st.session_state.garage = garage
    if structural:
        # Fresh widget keys so rows do not inherit a removed row's inputs
        st.session_state.table_version += 1


def read_upload(uploaded: IO) -> Tuple[Optional[Garage], Optional[str]]:
    """
    Parse an uploaded car table.

    Args:
        uploaded: File object with a `name` attribute, as the uploader gives

    Returns:
        (garage, None) on success, (None, message) when the table is unusable
    """
    try:
        return CarLoader(uploaded, suffix=Path(uploaded.name).suffix).garage(), None
    except (ValueError, FileNotFoundError) as exc:
        logger.warning("Could not load %s: %s", uploaded.name, exc)
        return None, f"Could not load {uploaded.name}: {exc}"


def _on_edit(index: int, field_name: str, key: str):
    _replace_garage(_state().update_car(index, **{field_name: st.session_state[key]}))


def _render_car_rows(garage: Garage):
    version = st.session_state.table_version
    header = st.columns([3, 2, 2, 2, 1])
    for col, title in zip(header, ["Name", "Buy Price (€)", "Liters/100km", "Fuel Type", "Remove"]):
        col.markdown(f"**{title}**")

    for idx, car in enumerate(garage):
        cols = st.columns([3, 2, 2, 2, 1])
        key = f"{version}_{idx}"
        cols[0].text_input("Name", value=car.name, key=f"name_{key}",
                           label_visibility='collapsed',
                           on_change=_on_edit, args=(idx, 'name', f"name_{key}"))
        cols[1].number_input("Buy Price", value=float(car.buy_price),
                             step=100.0, key=f"buy_{key}", label_visibility='collapsed',
                             on_change=_on_edit, args=(idx, 'buy_price', f"buy_{key}"))
        cols[2].number_input("Liters/100km", value=float(car.liters_per_100km),
                             step=0.1, key=f"liters_{key}", label_visibility='collapsed',
                             on_change=_on_edit, args=(idx, 'liters_per_100km', f"liters_{key}"))
        cols[3].selectbox("Fuel Type", FUEL_OPTIONS, index=FUEL_OPTIONS.index(car.fuel_type.value),
                          format_func=lambda v: FuelType(v).label, key=f"fuel_{key}",
                          label_visibility='collapsed',
                          on_change=_on_edit, args=(idx, 'fuel_type', f"fuel_{key}"))
        if cols[4].button("🗑", key=f"remove_{key}", disabled=not garage.can_remove,
                          help="Remove car"):
            _replace_garage(garage.remove_car(idx), structural=True)
            st.rerun()


def render():
    settings = load_settings()
    configure_logging(settings.log_level)
    calculator = CostCalculator(settings)

    st.set_page_config(page_title="Car Cost Comparison", page_icon="🚗", layout="wide")
    st.title("Car Cost Comparison")

    left, right = st.columns(2)
    petrol = left.number_input("Petrol Price (€/L)", value=settings.petrol_price,
                               step=0.01, format="%.3f")
    diesel = right.number_input("Diesel Price (€/L)", value=settings.diesel_price,
                                step=0.01, format="%.3f")
    prices = FuelPrices(petrol=petrol or 0.0, diesel=diesel or 0.0)

    uploaded = st.file_uploader("Load cars from CSV or Excel", type=['csv', 'xlsx'])
    if uploaded is not None and st.session_state.get('loaded_file') != uploaded.file_id:
        loaded, error = read_upload(uploaded)
        if error:
            st.error(error)
        else:
            st.session_state.loaded_file = uploaded.file_id
            _state()
            _replace_garage(loaded, structural=True)

    st.subheader("Cars")
    _render_car_rows(_state())
    if st.button("➕ Add Car", key="add_car", help="Add car"):
        _replace_garage(_state().add_car(), structural=True)
        st.rerun()

    result = calculator.calculate(list(_state()), prices)

    st.divider()
    st.subheader("Cost Plot")
    fig = CostVisualizer.plot_costs(result, show=False)
    st.pyplot(fig)
    plt.close(fig)

    lines = break_even_lines(result)
    if lines:
        st.subheader("Break-even Points")
        st.markdown("\n".join(f"- {line}" for line in lines))


def main():
    """Console entry point: launch this page through the Streamlit CLI."""
    from streamlit.web import cli as stcli

    sys.argv = ["streamlit", "run", str(Path(__file__).resolve())]
    sys.exit(stcli.main())


if __name__ == "__main__":
    render()
