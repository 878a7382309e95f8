import asyncio
import importlib
import logging
import os
import sys

import discord
from discord import app_commands
from discord.ext import commands

import config
from gamecore.feed import PriceFeed
from gamecore.series import SeriesBuffer

logging.basicConfig(level=config.LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
log = logging.getLogger("stockbox")

intents = discord.Intents.default()
intents.guilds = True

bot = commands.Bot(command_prefix='!', intents=intents)
tree = bot.tree

# Live price history shared with the /stock command through interaction.client
bot.price_history = SeriesBuffer(capacity=config.HISTORY_CAPACITY)
price_feed = PriceFeed(bot.price_history, start_price=config.START_PRICE)

_started = False


async def _price_feed_task():
    await bot.wait_until_ready()
    while not bot.is_closed():
        try:
            price_feed.tick()
        except Exception:
            log.exception("Price tick failed")
        await asyncio.sleep(config.TICK_SECONDS)


@tree.error
async def on_app_command_error(interaction: discord.Interaction, error: app_commands.AppCommandError):
    log.error("Command /%s failed", interaction.command.name if interaction.command else '?', exc_info=error)
    try:
        if interaction.response.is_done():
            await interaction.followup.send("Error running command.", ephemeral=True)
        else:
            await interaction.response.send_message("Error running command.", ephemeral=True)
    except discord.HTTPException as e:
        log.warning("Could not report command error: %s", e)


async def _load_commands():
    # A retried startup registers everything again from scratch
    tree.clear_commands(guild=None)
    # Load all slash commands from commands folder
    commands_dir = os.path.join(os.path.dirname(__file__), 'commands')
    for filename in sorted(os.listdir(commands_dir)):
        if not filename.endswith('.py'):
            continue
        mod = importlib.import_module(f'commands.{filename[:-3]}')
        # Look for any class ending with 'Command' that has an async setup(tree)
        for attr in dir(mod):
            if attr.endswith('Command'):
                setup = getattr(getattr(mod, attr), 'setup', None)
                if setup is not None:
                    maybe_coro = setup(tree)
                    if hasattr(maybe_coro, "__await__"):
                        await maybe_coro
                    log.debug("Registered %s.%s", mod.__name__, attr)


@bot.event
async def on_ready():
    global _started
    log.info("Logged in as %s", bot.user)
    # on_ready fires again after reconnects
    if _started:
        return
    await _load_commands()
    synced = await tree.sync()
    log.info("Synced %d commands", len(synced))
    asyncio.create_task(_price_feed_task())
    _started = True


def main():
    if config.DISCORD_TOKEN is None:
        print("Error: DISCORD_TOKEN environment variable not found.")
        sys.exit(1)
    bot.run(config.DISCORD_TOKEN, log_handler=None)


if __name__ == '__main__':
    main()
