import logging
from typing import List, Optional

import discord

import config
from gamecore.store import JsonStore

log = logging.getLogger(__name__)

balances = JsonStore(config.BALANCES_FILE, {})
inventory = JsonStore(config.INVENTORY_FILE, {})
lootboxes = JsonStore(config.LOOTBOXES_FILE, {})
admins = JsonStore(config.ADMINS_FILE, [])
settings = JsonStore(config.SETTINGS_FILE, {})


def is_admin(user_id: str, store: Optional[JsonStore] = None, seeded: Optional[set] = None) -> bool:
    store = store or admins
    seeded = config.ADMIN_IDS if seeded is None else seeded
    return str(user_id) in seeded or str(user_id) in (store.load() or [])


def list_admins(store: Optional[JsonStore] = None, seeded: Optional[set] = None) -> List[str]:
    store = store or admins
    seeded = config.ADMIN_IDS if seeded is None else seeded
    return sorted(set(store.load() or []) | set(seeded))


async def deny(interaction: discord.Interaction, message: str) -> None:
    await interaction.response.send_message(f"> ❌ {message}", ephemeral=True)


async def require_admin(interaction: discord.Interaction) -> bool:
    if is_admin(str(interaction.user.id)):
        return True
    log.info("Denied admin command /%s for %s", interaction.command.name if interaction.command else '?', interaction.user)
    await deny(interaction, "Admins only.")
    return False
