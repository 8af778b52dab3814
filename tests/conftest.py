import pytest

from khakhra_dashboard import data_state as ds
from khakhra_dashboard.data_state import DataStore
from khakhra_dashboard.models import AppState, FinishedGood, InventoryState, RawMaterial
from khakhra_dashboard.sample_data import CUSTOMERS, PRODUCTS

STAMP = "2024-05-01T09:00:00+05:30"


@pytest.fixture
def state_file(tmp_path):
    return str(tmp_path / "data" / "state.json")


@pytest.fixture
def base_state():
    """Catalogue + one batch of masala (10 pkts) and one raw material, no orders."""
    return AppState(
        customers=CUSTOMERS,
        products=PRODUCTS,
        inventory=InventoryState(
            raw_materials=(RawMaterial("rm-wheat", "Whole Wheat Flour", "kg", 100, 50, STAMP),),
            finished_goods=(
                FinishedGood("fg-1", "masala", "MS-1", 10, 4, STAMP, "2024-08-29T09:00:00+05:30"),
                FinishedGood("fg-2", "masala", "MS-2", 50, 20, STAMP, "2024-09-10T09:00:00+05:30"),
            ),
        ),
    )


@pytest.fixture
def store(state_file, base_state):
    s = DataStore(state_file, seed_sample=False)
    s.replace_state(base_state)
    return s


@pytest.fixture
def sample_store(state_file):
    s = DataStore(state_file, seed_sample=True)
    ds.set_store(s)
    yield s
    ds.set_store(None)
