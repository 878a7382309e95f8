import math
import time
from typing import List, Sequence

from gamecore.series import Sample

FILLED = '█'
SHADOW = '▒'
EMPTY = '░'
TICK = '┤'
RULE = '│'
CORNER = '└'
BORDER = '─'
FENCE = '```'

LABEL_WIDTH = 4
LABEL_EVERY = 4
TIME_LABELS = 4
SHADOW_DEPTH = 2


class EmptyInputError(ValueError):
    """Raised when a chart is requested for an empty sample window."""


def price_bounds(prices: Sequence[float]) -> tuple[int, int, int]:
    """Return (min_price, max_price, price_range) with the axis rounded outward to multiples of 5."""
    min_price = math.floor(min(prices) / 5) * 5
    max_price = math.ceil(max(prices) / 5) * 5
    return min_price, max_price, max(1, max_price - min_price)


def _time_label(timestamp_ms: float) -> str:
    return time.strftime('%H:%M', time.localtime(timestamp_ms / 1000))


class AsciiChartRenderer:
    def __init__(self, width: int = 50, height: int = 20):
        self.width = width
        self.height = height

    def render(self, samples: Sequence[Sample], width: int | None = None, height: int | None = None) -> str:
        lines = self.render_lines(samples, width, height)
        return FENCE + '\n' + '\n'.join(lines) + '\n' + FENCE

    def render_lines(self, samples: Sequence[Sample], width: int | None = None, height: int | None = None) -> List[str]:
        width = self.width if width is None else width
        height = self.height if height is None else height
        if not samples:
            raise EmptyInputError("no samples to render")
        if width <= 0 or height <= 0:
            raise ValueError(f"chart size must be positive, got {width}x{height}")

        min_price, max_price, price_range = price_bounds([s.price for s in samples])
        grid = [[EMPTY] * width for _ in range(height)]

        ys: List[int] = []
        for x in range(width):
            price = samples[x * len(samples) // width].price
            y = height - 1 - math.floor((price - min_price) / price_range * (height - 1))
            ys.append(y)
            grid[y][x] = FILLED

        for x in range(width - 1):
            top, bottom = sorted((ys[x], ys[x + 1]))
            for yi in range(top, bottom + 1):
                grid[yi][x] = FILLED
            for yi in range(bottom + 1, min(bottom + 1 + SHADOW_DEPTH, height)):
                grid[yi][x] = SHADOW

        denom = max(1, height - 1)
        labels = {
            row: str(max_price - math.floor(row / denom * price_range))
            for row in range(0, height, LABEL_EVERY)
        }
        label_width = max([LABEL_WIDTH] + [len(v) for v in labels.values()])

        lines = []
        for row, cells in enumerate(grid):
            if row in labels:
                axis = labels[row].rjust(label_width) + ' ' + TICK
            else:
                axis = ' ' * (label_width + 1) + RULE
            lines.append(axis + ''.join(cells))

        lines.append(' ' * (label_width + 1) + CORNER + BORDER * width)
        lines.append(' ' * (label_width + 2) + self._time_row(samples, width))
        return lines

    @staticmethod
    def _time_row(samples: Sequence[Sample], width: int) -> str:
        start = samples[0].timestamp
        end = samples[-1].timestamp
        row = [' '] * width
        for i in range(TIME_LABELS):
            text = _time_label(start + i / (TIME_LABELS - 1) * (end - start))
            x = i * (width - 1) // (TIME_LABELS - 1) - len(text) // 2
            for j, ch in enumerate(text):
                if 0 <= x + j < width:
                    row[x + j] = ch
        return ''.join(row)
