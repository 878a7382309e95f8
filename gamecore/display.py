import asyncio
import logging
import time
from typing import Awaitable, Callable, Optional

from gamecore.chart import AsciiChartRenderer, EmptyInputError
from gamecore.series import SeriesBuffer, now_ms

log = logging.getLogger(__name__)

NO_DATA = "No data."


def chart_text(buffer: SeriesBuffer, window_seconds: float, renderer: Optional[AsciiChartRenderer] = None,
               now: Optional[int] = None) -> str:
    renderer = renderer or AsciiChartRenderer()
    samples = buffer.query_range(now_ms() if now is None else now, window_seconds)
    try:
        return renderer.render(samples)
    except EmptyInputError:
        return NO_DATA


async def stream_chart(push: Callable[[str], Awaitable[None]], produce: Callable[[], str],
                       interval: float, duration: float,
                       clock: Callable[[], float] = time.monotonic) -> int:
    """Push a freshly produced chart every ``interval`` seconds until ``duration`` elapses.

    The first push happens immediately. Returns the number of successful pushes.
    A push that raises ends the stream; the sink is assumed gone.
    """
    deadline = clock() + duration
    pushed = 0
    while True:
        try:
            await push(produce())
        except Exception as e:
            log.warning("Chart push failed, stopping stream: %s", e)
            break
        pushed += 1
        if clock() + interval > deadline:
            break
        await asyncio.sleep(interval)
    return pushed
