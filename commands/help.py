import discord
from discord import app_commands

HELP_TEXT = (
    "🛠️ **Commands**\n"
    "• `/balance` `/inventory` `/help`\n"
    "• `/stock` live price graph, `/range` set its time window (e.g. `30m`, `2h`, max `12h`)\n"
    "• `/lootbox list` `/lootbox open`\n"
    "• Admin: `/seteco` `/addeco` `/reseteco` `/admin` `/lootbox create|delete|edit|give`"
)


class HelpCommand:
    @staticmethod
    async def setup(tree: app_commands.CommandTree):
        @tree.command(name="help", description="Show the command list")
        @app_commands.allowed_contexts(dms=True, guilds=True, private_channels=True)
        async def help_(interaction: discord.Interaction):
            await interaction.response.send_message(HELP_TEXT, ephemeral=True)
