import os
import tempfile
from pathlib import Path
import pytest
from unittest.mock import patch

from calc_core import Calculator
from calc_bridge import CalculatorBridge
from calc_session import CalcSession

@pytest.fixture
def calc():
    return Calculator()

@pytest.fixture
def seeded_calc(): # 10 + 5, * 2, - 10, / 4 -> 5 with four history entries
    c = Calculator()
    c.set_value(10.0)
    c.add(5.0)
    c.multiply(2.0)
    c.subtract(10.0)
    c.divide(4.0)
    return c

@pytest.fixture
def bridge():
    return CalculatorBridge()

@pytest.fixture
def session():
    return CalcSession(quiet=True)

@pytest.fixture
def clean_calc_env():
    # Strip CALC_* variables so tests see the defaults
    cleaned = {k: v for k, v in os.environ.items() if not k.startswith("CALC_")}
    with patch.dict(os.environ, cleaned, clear=True):
        yield

@pytest.fixture
def temp_dir_fixture():
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir).resolve()
