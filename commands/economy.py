import logging
from typing import Optional

import discord
from discord import app_commands

from commands import common
from gamecore.store import JsonStore

log = logging.getLogger(__name__)


def get_balance(store: JsonStore, user_id: str) -> int:
    return int((store.load() or {}).get(str(user_id), 0) or 0)


def set_balance(store: JsonStore, user_id: str, amount: int) -> int:
    amount = max(0, int(amount))
    with store.update() as data:
        data[str(user_id)] = amount
    return amount


def add_balance(store: JsonStore, user_id: str, amount: int) -> int:
    with store.update() as data:
        new = int(data.get(str(user_id), 0) or 0) + int(amount)
        data[str(user_id)] = new
    return new


def reset_balances(store: JsonStore, user_id: Optional[str] = None) -> int:
    """Zero one user's balance, or wipe every balance when no user is given. Returns how many were reset."""
    with store.update() as data:
        if user_id is not None:
            data[str(user_id)] = 0
            return 1
        count = len(data)
        data.clear()
    return count


class EconomyCommand:
    @staticmethod
    async def setup(tree: app_commands.CommandTree):
        @tree.command(name="balance", description="Check your current balance")
        @app_commands.describe(user="Whose balance to show")
        async def balance(interaction: discord.Interaction, user: Optional[discord.User] = None):
            target = user or interaction.user
            bal = get_balance(common.balances, str(target.id))
            if target.id == interaction.user.id:
                await interaction.response.send_message(f"> 💰 You have **{bal} coins**.")
            else:
                await interaction.response.send_message(f"> 💰 {target.display_name} has **{bal} coins**.")

        @tree.command(name="seteco", description="Set a user's balance (admin)")
        @app_commands.describe(amount="New balance", user="User to set (defaults to you)")
        async def seteco(interaction: discord.Interaction, amount: int, user: Optional[discord.User] = None):
            if not await common.require_admin(interaction):
                return
            target = user or interaction.user
            new = set_balance(common.balances, str(target.id), amount)
            log.info("%s set balance of %s to %d", interaction.user, target, new)
            await interaction.response.send_message(f"> ✅ Set {target.display_name}'s balance to **{new}**.")

        @tree.command(name="addeco", description="Add coins to a user's balance (admin)")
        @app_commands.describe(amount="Coins to add (negative to remove)", user="User to credit")
        async def addeco(interaction: discord.Interaction, amount: int, user: discord.User):
            if not await common.require_admin(interaction):
                return
            new = add_balance(common.balances, str(user.id), amount)
            log.info("%s added %d to %s (now %d)", interaction.user, amount, user, new)
            await interaction.response.send_message(f"> ✅ Added **{amount}** to {user.display_name}'s balance. Now **{new}**.")

        @tree.command(name="reseteco", description="Reset one user's balance, or everyone's (admin)")
        @app_commands.describe(user="User to reset; leave empty to reset all balances")
        async def reseteco(interaction: discord.Interaction, user: Optional[discord.User] = None):
            if not await common.require_admin(interaction):
                return
            if user is not None:
                reset_balances(common.balances, str(user.id))
                await interaction.response.send_message(f"> ♻️ Reset balance of {user.display_name}.")
                return
            count = reset_balances(common.balances)
            log.info("%s reset all balances (%d accounts)", interaction.user, count)
            await interaction.response.send_message("> ♻️ All balances have been reset.")
