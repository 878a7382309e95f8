import logging
import random
from typing import Optional

from gamecore.series import Sample, SeriesBuffer, now_ms

log = logging.getLogger(__name__)

START_PRICE = 100.0
PRICE_FLOOR = 1.0
MAX_STEP = 1.0


def next_price(last: Optional[float], rng: Optional[random.Random] = None, start: float = START_PRICE) -> float:
    """Random walk step of at most +-1, never below the price floor."""
    rng = rng or random
    base = start if last is None else last
    return max(PRICE_FLOOR, base + rng.uniform(-MAX_STEP, MAX_STEP))


class PriceFeed:
    def __init__(self, buffer: SeriesBuffer, rng: Optional[random.Random] = None, start_price: float = START_PRICE):
        self.buffer = buffer
        self.rng = rng or random.Random()
        self.start_price = start_price

    def tick(self, timestamp: Optional[int] = None) -> Sample:
        last = self.buffer.latest()
        price = next_price(last.price if last else None, self.rng, self.start_price)
        sample = Sample(timestamp=now_ms() if timestamp is None else timestamp, price=price)
        self.buffer.append(sample)
        log.debug("tick %.2f (%d samples)", price, len(self.buffer))
        return sample
