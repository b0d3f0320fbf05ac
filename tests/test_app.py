import io
from pathlib import Path

import pytest
from streamlit.testing.v1 import AppTest

from car_cost.app import read_upload
from car_cost.garage import Garage
from car_cost.models import Car

APP_PATH = str(Path(__file__).resolve().parent.parent / "car_cost" / "app.py")


def _app(garage=None) -> AppTest:
    at = AppTest.from_file(APP_PATH, default_timeout=30)
    if garage is not None:
        at.session_state["garage"] = garage
    return at.run()


def _subheaders(at):
    return [s.value for s in at.subheader]


class _Upload(io.BytesIO):
    def __init__(self, data: bytes, name: str):
        super().__init__(data)
        self.name = name


def test_default_page_renders_one_row():
    at = _app()
    assert not at.exception
    assert len(at.session_state["garage"]) == 1
    assert at.button(key="remove_0_0").disabled


def test_no_break_even_section_without_crossings():
    at = _app()
    assert "Cost Plot" in _subheaders(at)
    assert "Break-even Points" not in _subheaders(at)


def test_add_car_keeps_existing_rows():
    golf = Car(name="Golf", buy_price=20000.0, liters_per_100km=5.0)
    at = _app(Garage((golf,)))
    at.button(key="add_car").click().run()

    assert not at.exception
    garage = at.session_state["garage"]
    assert list(garage) == [golf, Car()]
    version = at.session_state["table_version"]
    assert not at.button(key=f"remove_{version}_0").disabled


def test_remove_car_shifts_rows():
    at = _app(Garage((Car(name="A"), Car(name="B"))))
    at.button(key="remove_0_0").click().run()

    assert not at.exception
    assert [c.name for c in at.session_state["garage"]] == ["B"]


def test_break_even_section_lists_crossings():
    cars = (
        Car(buy_price=17000.0, liters_per_100km=8.0),
        Car(name="Saver", buy_price=20000.0, liters_per_100km=4.0),
    )
    at = _app(Garage(cars))
    assert "Break-even Points" in _subheaders(at)
    assert any("75,000 km" in m.value for m in at.markdown)


def test_negative_coerced_values_still_render():
    """Coercion keeps negative numbers; the row must render anyway."""
    used = Car(name="Used", buy_price=-500.0, liters_per_100km=-1.0)
    at = _app(Garage((used,)))
    assert not at.exception
    assert at.number_input(key="buy_0_0").value == -500.0


def test_read_upload_replaces_garage():
    upload = _Upload(b"name,buy price,liters/100km\nGolf,20000,5\n,15000,7\n", "cars.csv")
    garage, error = read_upload(upload)
    assert error is None
    assert [c.name for c in garage] == ["Golf", ""]


@pytest.mark.parametrize("data, name", [
    (b"name,price\nGolf,20000\n", "cars.csv"),
    (b"[]", "cars.json"),
])
def test_read_upload_reports_unusable_tables(data, name):
    garage, error = read_upload(_Upload(data, name))
    assert garage is None
    assert error.startswith(f"Could not load {name}")
