from __future__ import annotations

from pathlib import Path

import pytest

from alphabet import Alphabet
from utilities import standard_config

DATA = Path(__file__).parent / "data"


@pytest.fixture
def data_dir() -> Path:
    return DATA


@pytest.fixture
def upper() -> Alphabet:
    return Alphabet()


@pytest.fixture
def naval():
    """A fresh five-slot, three-pawl machine with the standard wheels."""
    return standard_config().build()
