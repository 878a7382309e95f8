import asyncio
import logging
from typing import Optional, Set

import discord
from discord import app_commands

import config
from commands import common
from gamecore.chart import AsciiChartRenderer
from gamecore.display import chart_text, stream_chart
from gamecore.durations import parse_duration, validate_range
from gamecore.series import SeriesBuffer
from gamecore.store import JsonStore

log = logging.getLogger(__name__)

# Keep references so running streams are not garbage collected
_streams: Set[asyncio.Task] = set()


def get_user_range(store: JsonStore, user_id: str, default: int = config.DEFAULT_RANGE_SECONDS) -> int:
    entry = (store.load() or {}).get(str(user_id))
    if not isinstance(entry, dict):
        return default
    try:
        return int(entry.get('range', default))
    except (TypeError, ValueError):
        return default


def set_user_range(store: JsonStore, user_id: str, seconds: int) -> None:
    with store.update() as data:
        data.setdefault(str(user_id), {})['range'] = int(seconds)


def _buffer_for(interaction: discord.Interaction) -> Optional[SeriesBuffer]:
    return getattr(interaction.client, 'price_history', None)


class StockCommand:
    @staticmethod
    async def setup(tree: app_commands.CommandTree):
        renderer = AsciiChartRenderer(width=config.GRAPH_WIDTH, height=config.GRAPH_HEIGHT)

        @tree.command(name="stock", description="Show a live-updating stock graph")
        @app_commands.allowed_contexts(dms=True, guilds=True, private_channels=True)
        async def stock(interaction: discord.Interaction):
            buffer = _buffer_for(interaction)
            if buffer is None:
                await common.deny(interaction, "The price feed is not running.")
                return
            window = get_user_range(common.settings, str(interaction.user.id))
            log.info("/stock invoked by %s (range %ds)", interaction.user, window)
            await interaction.response.defer(ephemeral=True, thinking=True)

            async def push(text: str) -> None:
                await interaction.edit_original_response(content=text)

            task = asyncio.create_task(stream_chart(
                push,
                lambda: chart_text(buffer, window, renderer),
                interval=config.REFRESH_SECONDS,
                duration=window,
            ))
            _streams.add(task)
            task.add_done_callback(_streams.discard)

        @tree.command(name="range", description="Set how much time the stock graph shows")
        @app_commands.describe(time="e.g. 30m, 2h (max 12h)")
        @app_commands.allowed_contexts(dms=True, guilds=True, private_channels=True)
        async def range_(interaction: discord.Interaction, time: str):
            seconds = parse_duration(time)
            if not validate_range(seconds, config.MAX_RANGE_SECONDS):
                await common.deny(interaction, "Invalid range. Use `30m`, `2h`, max `12h`.")
                return
            set_user_range(common.settings, str(interaction.user.id), seconds)
            await interaction.response.send_message(f"> ✅ Set your graph range to `{time}`.", ephemeral=True)
