import logging

import discord
from discord import app_commands

from commands import common
from gamecore.store import JsonStore

log = logging.getLogger(__name__)


def add_admin(store: JsonStore, user_id: str) -> bool:
    with store.update() as ids:
        if str(user_id) in ids:
            return False
        ids.append(str(user_id))
    return True


def remove_admin(store: JsonStore, user_id: str) -> bool:
    with store.update() as ids:
        if str(user_id) not in ids:
            return False
        ids.remove(str(user_id))
    return True


class AdminCommand:
    @staticmethod
    async def setup(tree: app_commands.CommandTree):
        group = app_commands.Group(name="admin", description="Manage bot admins")

        @group.command(name="add", description="Grant admin rights")
        async def add(interaction: discord.Interaction, user: discord.User):
            if not await common.require_admin(interaction):
                return
            if not add_admin(common.admins, str(user.id)):
                await interaction.response.send_message(f"> ℹ️ {user.display_name} is already an admin.", ephemeral=True)
                return
            log.info("%s granted admin to %s", interaction.user, user)
            await interaction.response.send_message(f"> ✅ {user.display_name} is now an admin.", ephemeral=True)

        @group.command(name="remove", description="Revoke admin rights")
        async def remove(interaction: discord.Interaction, user: discord.User):
            if not await common.require_admin(interaction):
                return
            if not remove_admin(common.admins, str(user.id)):
                await interaction.response.send_message(f"> ℹ️ {user.display_name} is not a listed admin.", ephemeral=True)
                return
            log.info("%s revoked admin from %s", interaction.user, user)
            await interaction.response.send_message(f"> ✅ Removed {user.display_name} from admins.", ephemeral=True)

        @group.command(name="list", description="List bot admins")
        async def list_(interaction: discord.Interaction):
            ids = common.list_admins()
            text = "\n".join(f"<@{uid}>" for uid in ids) or "No admins configured."
            await interaction.response.send_message(text, ephemeral=True)

        tree.add_command(group)
