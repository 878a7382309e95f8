import logging
from collections import Counter
from typing import Dict, List, Optional

import discord
from discord import app_commands

from commands import common
from gamecore.loot import LootContainer, LootItem, WeightedLootDrawer
from gamecore.store import JsonStore

log = logging.getLogger(__name__)

drawer = WeightedLootDrawer()


class LootboxError(Exception):
    """User-facing lootbox failure; the message is shown as is."""


def parse_positive_int(text: str) -> Optional[int]:
    try:
        value = int(str(text).strip())
    except (TypeError, ValueError):
        return None
    return value if value > 0 else None


def load_box(store: JsonStore, name: str) -> LootContainer:
    raw = (store.load() or {}).get(name)
    if raw is None:
        raise LootboxError("Lootbox not found.")
    return LootContainer.from_dict(raw)


def create_box(store: JsonStore, name: str) -> None:
    with store.update() as boxes:
        if name in boxes:
            raise LootboxError("Lootbox already exists.")
        boxes[name] = LootContainer().to_dict()


def delete_box(store: JsonStore, name: str) -> None:
    with store.update() as boxes:
        if boxes.pop(name, None) is None:
            raise LootboxError("Lootbox not found.")


def add_item(store: JsonStore, name: str, item_name: str, weight: int) -> LootContainer:
    with store.update() as boxes:
        if name not in boxes:
            raise LootboxError("Lootbox not found.")
        box = LootContainer.from_dict(boxes[name])
        box.items.append(LootItem(name=item_name, weight=weight))
        boxes[name] = box.to_dict()
    return box


def set_drops(store: JsonStore, name: str, drops: int) -> LootContainer:
    with store.update() as boxes:
        if name not in boxes:
            raise LootboxError("Lootbox not found.")
        box = LootContainer.from_dict(boxes[name])
        box.drops = drops
        boxes[name] = box.to_dict()
    return box


def give_box(boxes: JsonStore, inventory: JsonStore, name: str, user_id: str) -> None:
    load_box(boxes, name)
    with inventory.update() as inv:
        inv.setdefault(str(user_id), []).append(name)


def open_box(boxes: JsonStore, inventory: JsonStore, user_id: str, name: str,
             lootdrawer: Optional[WeightedLootDrawer] = None) -> List[str]:
    """Consume one ``name`` box from the user's inventory and add what it drops."""
    lootdrawer = lootdrawer or drawer
    with inventory.update() as inv:
        items = inv.setdefault(str(user_id), [])
        if name not in items:
            raise LootboxError("You do not have that lootbox.")
        box = load_box(boxes, name)
        items.remove(name)
        drops = lootdrawer.open(box)
        items.extend(drops)
    return drops


MESSAGE_LIMIT = 2000


def fit_parts(parts: List[str], sep: str, limit: int) -> str:
    """Join as many parts as fit in ``limit`` characters, noting how many were left out."""
    text = ''
    for i, part in enumerate(parts):
        more = len(parts) - i
        suffix = f"{sep}... and {more} more"
        candidate = text + sep + part if text else part
        rest_needed = len(suffix) if i + 1 < len(parts) else 0
        if len(candidate) + rest_needed > limit:
            return (text + suffix if text else f"... {more} more")[:limit]
        text = candidate
    return text


def summarize_drops(drops: List[str], limit: int = 1500) -> str:
    if not drops:
        return 'nothing'
    parts = [f"{name} ×{n}" if n > 1 else name for name, n in Counter(drops).items()]
    return fit_parts(parts, ', ', limit)


def format_inventory(counts: Dict[str, int], limit: int = MESSAGE_LIMIT) -> str:
    if not counts:
        return "Inventory is empty."
    return fit_parts([f"{item}: {count}" for item, count in counts.items()], "\n", limit)


def inventory_counts(inventory: JsonStore, user_id: str) -> Dict[str, int]:
    return dict(Counter((inventory.load() or {}).get(str(user_id), [])))


async def _box_autocomplete(interaction: discord.Interaction, current: str) -> List[app_commands.Choice[str]]:
    names = sorted((common.lootboxes.load() or {}).keys())
    return [app_commands.Choice(name=n, value=n) for n in names if current.lower() in n.lower()][:25]


async def _owned_box_autocomplete(interaction: discord.Interaction, current: str) -> List[app_commands.Choice[str]]:
    boxes = common.lootboxes.load() or {}
    owned = [n for n in inventory_counts(common.inventory, str(interaction.user.id)) if n in boxes]
    return [app_commands.Choice(name=n, value=n) for n in sorted(owned) if current.lower() in n.lower()][:25]


# --------------- UI Components ---------------

class AddItemModal(discord.ui.Modal, title="Add item"):
    def __init__(self, box_name: str):
        super().__init__(title=f"Add item to {box_name}"[:45])
        self.box_name = box_name
        self.item_name = discord.ui.TextInput(label="Item Name", max_length=80)
        self.weight = discord.ui.TextInput(label="Weight", placeholder="Positive whole number", max_length=9)
        self.add_item(self.item_name)
        self.add_item(self.weight)

    async def on_submit(self, interaction: discord.Interaction):
        weight = parse_positive_int(self.weight.value)
        if weight is None:
            await common.deny(interaction, "Weight must be a positive whole number.")
            return
        try:
            add_item(common.lootboxes, self.box_name, self.item_name.value, weight)
        except LootboxError as e:
            await common.deny(interaction, str(e))
            return
        log.info("%s added %s (%d) to lootbox %s", interaction.user, self.item_name.value, weight, self.box_name)
        await interaction.response.send_message(
            f"> ✅ Added `{self.item_name.value}` with weight {weight} to `{self.box_name}`."
        )


class SetDropsModal(discord.ui.Modal, title="Set drops"):
    def __init__(self, box_name: str):
        super().__init__(title=f"Set drops for {box_name}"[:45])
        self.box_name = box_name
        self.drops = discord.ui.TextInput(label="Drops per open", placeholder="Positive whole number", max_length=4)
        self.add_item(self.drops)

    async def on_submit(self, interaction: discord.Interaction):
        drops = parse_positive_int(self.drops.value)
        if drops is None:
            await common.deny(interaction, "Drops must be a positive whole number.")
            return
        try:
            set_drops(common.lootboxes, self.box_name, drops)
        except LootboxError as e:
            await common.deny(interaction, str(e))
            return
        await interaction.response.send_message(f"> ✅ Set drops for `{self.box_name}` to {drops}.")


class LootboxEditView(discord.ui.View):
    def __init__(self, box_name: str):
        super().__init__(timeout=300)
        self.box_name = box_name

    async def interaction_check(self, interaction: discord.Interaction, /) -> bool:
        if common.is_admin(str(interaction.user.id)):
            return True
        await common.deny(interaction, "Admins only.")
        return False

    @discord.ui.button(label="Add Item", style=discord.ButtonStyle.primary)
    async def add_item_button(self, interaction: discord.Interaction, button: discord.ui.Button):
        await interaction.response.send_modal(AddItemModal(self.box_name))

    @discord.ui.button(label="Set Drops", style=discord.ButtonStyle.secondary)
    async def set_drops_button(self, interaction: discord.Interaction, button: discord.ui.Button):
        await interaction.response.send_modal(SetDropsModal(self.box_name))


def _render_boxes_embed(boxes: Dict[str, dict]) -> discord.Embed:
    embed = discord.Embed(title="🎁 Lootboxes", color=discord.Color.gold())
    if not boxes:
        embed.description = "No lootboxes yet."
    for name, raw in list(boxes.items())[:25]:
        embed.add_field(name=name, value=LootContainer.from_dict(raw).describe()[:1024], inline=False)
    return embed


class LootboxCommand:
    @staticmethod
    async def setup(tree: app_commands.CommandTree):
        group = app_commands.Group(name="lootbox", description="Create, give and open lootboxes")

        @group.command(name="create", description="Create an empty lootbox (admin)")
        async def create(interaction: discord.Interaction, name: str):
            if not await common.require_admin(interaction):
                return
            try:
                create_box(common.lootboxes, name)
            except LootboxError as e:
                await common.deny(interaction, str(e))
                return
            log.info("%s created lootbox %s", interaction.user, name)
            await interaction.response.send_message(f"> ✅ Lootbox `{name}` created. Use `/lootbox edit` to add items.")

        @group.command(name="delete", description="Delete a lootbox (admin)")
        @app_commands.autocomplete(name=_box_autocomplete)
        async def delete(interaction: discord.Interaction, name: str):
            if not await common.require_admin(interaction):
                return
            try:
                delete_box(common.lootboxes, name)
            except LootboxError as e:
                await common.deny(interaction, str(e))
                return
            await interaction.response.send_message(f"> 🗑️ Lootbox `{name}` deleted.")

        @group.command(name="list", description="List every lootbox and its contents")
        async def list_(interaction: discord.Interaction):
            await interaction.response.send_message(embed=_render_boxes_embed(common.lootboxes.load() or {}))

        @group.command(name="edit", description="Add items or change drops (admin)")
        @app_commands.autocomplete(name=_box_autocomplete)
        async def edit(interaction: discord.Interaction, name: str):
            if not await common.require_admin(interaction):
                return
            try:
                box = load_box(common.lootboxes, name)
            except LootboxError as e:
                await common.deny(interaction, str(e))
                return
            await interaction.response.send_message(
                f"Editing lootbox `{name}`\n{box.describe()}", view=LootboxEditView(name)
            )

        @group.command(name="give", description="Give a lootbox to a user (admin)")
        @app_commands.autocomplete(name=_box_autocomplete)
        async def give(interaction: discord.Interaction, name: str, user: discord.User):
            if not await common.require_admin(interaction):
                return
            try:
                give_box(common.lootboxes, common.inventory, name, str(user.id))
            except LootboxError as e:
                await common.deny(interaction, str(e))
                return
            await interaction.response.send_message(f"> 🎁 {user.display_name} received 1 `{name}` lootbox.")

        @group.command(name="open", description="Open one of your lootboxes")
        @app_commands.autocomplete(name=_owned_box_autocomplete)
        async def open_(interaction: discord.Interaction, name: str):
            try:
                drops = open_box(common.lootboxes, common.inventory, str(interaction.user.id), name)
            except LootboxError as e:
                await common.deny(interaction, str(e))
                return
            log.info("%s opened %s: %s", interaction.user, name, drops)
            await interaction.response.send_message(f"> 🎉 You opened `{name[:100]}` and got: {summarize_drops(drops)}")

        tree.add_command(group)


class InventoryCommand:
    @staticmethod
    async def setup(tree: app_commands.CommandTree):
        @tree.command(name="inventory", description="Show an inventory")
        @app_commands.describe(user="Whose inventory to show")
        async def inventory(interaction: discord.Interaction, user: Optional[discord.User] = None):
            target = user or interaction.user
            counts = inventory_counts(common.inventory, str(target.id))
            await interaction.response.send_message(format_inventory(counts))
