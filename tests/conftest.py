import random

import pytest

from gamecore.series import Sample, SeriesBuffer
from gamecore.store import JsonStore

BASE_TS = 1_700_000_000_000


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def make_samples():
    def _make(prices, start=BASE_TS, step_ms=5000):
        return [Sample(timestamp=start + i * step_ms, price=float(p)) for i, p in enumerate(prices)]
    return _make


@pytest.fixture
def buffer(make_samples) -> SeriesBuffer:
    buf = SeriesBuffer(capacity=100)
    for s in make_samples([100, 101, 99.5, 102, 103.2]):
        buf.append(s)
    return buf


@pytest.fixture
def stores(tmp_path):
    return {
        'balances': JsonStore(str(tmp_path / 'balances.json'), {}),
        'inventory': JsonStore(str(tmp_path / 'inventory.json'), {}),
        'lootboxes': JsonStore(str(tmp_path / 'lootboxes.json'), {}),
        'admins': JsonStore(str(tmp_path / 'admins.json'), []),
        'settings': JsonStore(str(tmp_path / 'settings.json'), {}),
    }
