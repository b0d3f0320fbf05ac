import pytest

from car_cost.garage import Garage
from car_cost.models import Car, FuelType


def test_starts_with_one_default_car():
    garage = Garage()
    assert len(garage) == 1
    assert garage[0] == Car()
    assert not garage.can_remove


def test_empty_garage_gets_default_row():
    assert list(Garage(())) == [Car()]


def test_add_car_keeps_existing_rows():
    garage = Garage().update_car(0, name="Golf", buy_price="20000")
    bigger = garage.add_car()
    assert len(bigger) == 2
    assert bigger[0] == Car(name="Golf", buy_price=20000.0)
    assert bigger[1] == Car()
    assert len(garage) == 1


def test_update_car_replaces_only_that_row():
    garage = Garage().add_car().add_car()
    edited = garage.update_car(1, liters_per_100km="6.2", fuel_type="Diesel")
    assert edited[1].liters_per_100km == 6.2
    assert edited[1].fuel_type is FuelType.DIESEL
    assert edited[0] == Car()
    assert edited[2] == Car()
    assert garage[1] == Car()


def test_update_car_coerces_bad_numbers():
    garage = Garage().update_car(0, buy_price="lots")
    assert garage[0].buy_price == 0.0


def test_update_unknown_field():
    with pytest.raises(TypeError):
        Garage().update_car(0, colour="red")


def test_update_bad_index():
    with pytest.raises(IndexError):
        Garage().update_car(3, name="x")


def test_remove_car_shifts_later_rows():
    garage = Garage((Car(name="A"), Car(name="B"), Car(name="C")))
    smaller = garage.remove_car(1)
    assert [c.name for c in smaller] == ["A", "C"]
    assert [c.name for c in garage] == ["A", "B", "C"]


def test_remove_last_car_is_blocked(caplog):
    garage = Garage((Car(name="Only"),))
    with caplog.at_level("WARNING", logger="car_cost.garage"):
        assert garage.remove_car(0) is garage
    assert "only car" in caplog.text


def test_remove_bad_index():
    with pytest.raises(IndexError):
        Garage().add_car().remove_car(-1)


def test_list_input_is_stored_as_tuple():
    garage = Garage([Car(name="A"), Car(name="B")])
    assert isinstance(garage.cars, tuple)
    assert garage.can_remove
