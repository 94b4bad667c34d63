import sys
from pathlib import Path as _P

import pytest

# Ensure project root (containing the 'data_insights' package directory) is on sys.path
_project_root = _P(__file__).resolve().parents[2]
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

from data_insights import Dataset  # noqa: E402


@pytest.fixture
def sales_dataset() -> Dataset:
    return Dataset.build(
        [
            {"region": "North", "units": "10", "price": 2.5},
            {"region": "South", "units": "", "price": 4},
            {"region": "North", "units": "30", "price": None},
            {"region": "East", "price": "n/a"},
        ],
        ["region", "units", "price"],
    )
