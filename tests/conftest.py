# tests/conftest.py

import matplotlib

matplotlib.use("Agg")

import pytest
from datetime import datetime, timedelta


class FakeClock:
    """Clock the test moves by hand."""

    def __init__(self, start=datetime(2022, 6, 1, 9, 0, 0)):
        self.now = start

    def advance(self, **kwargs):
        self.now += timedelta(**kwargs)

    def __call__(self):
        return self.now


@pytest.fixture
def clock():
    return FakeClock()
