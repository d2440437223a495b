"""discord.ui views used by the gameplay cogs.

Every view is bound to one user; clicks from anyone else get an ephemeral
refusal. Views record their outcome on an attribute and `stop()` so callers
can `await view.wait()`.
"""
from __future__ import annotations

from typing import List, Optional, Sequence

import discord

from phoenix_bot.utils import helpers
from phoenix_bot.utils.battle_engine import ALL_ACTION_TYPES, ActionType
from phoenix_bot.utils.classes import ALL_CLASSES, CharacterClass


class OwnedView(discord.ui.View):
    """View that only accepts interactions from ``user_id``."""

    def __init__(self, user_id: int, *, timeout: Optional[float] = 60.0):
        super().__init__(timeout=timeout)
        self.user_id = int(user_id)

    async def interaction_check(self, interaction: discord.Interaction) -> bool:
        if interaction.user.id != self.user_id:
            await interaction.response.send_message("This isn't your menu.", ephemeral=True)
            return False
        return True

    def disable_all(self) -> None:
        for item in self.children:
            if isinstance(item, discord.ui.Button):
                item.disabled = True


class ConfirmView(OwnedView):
    def __init__(self, user_id: int, *, timeout: float = 60.0):
        super().__init__(user_id, timeout=timeout)
        self.result: Optional[bool] = None

    @discord.ui.button(label="Confirm", style=discord.ButtonStyle.success)
    async def confirm(self, interaction: discord.Interaction, button: discord.ui.Button):
        self.result = True
        self.stop()
        await interaction.response.defer()

    @discord.ui.button(label="Cancel", style=discord.ButtonStyle.secondary)
    async def cancel(self, interaction: discord.Interaction, button: discord.ui.Button):
        self.result = False
        self.stop()
        await interaction.response.edit_message(embed=helpers.make_embed("Cancelled", "Action cancelled."), view=None)


class _ChoiceButton(discord.ui.Button):
    def __init__(self, value, **kwargs):
        super().__init__(**kwargs)
        self.value = value

    async def callback(self, interaction: discord.Interaction):
        view = self.view
        view.choose(self.value)
        await interaction.response.defer()


class BattleActionView(OwnedView):
    """One button per `ActionType` for the fighter whose turn it is."""

    def __init__(self, user_id: int, *, timeout: Optional[float] = 500.0,
                 actions: Sequence[ActionType] = ALL_ACTION_TYPES):
        super().__init__(user_id, timeout=timeout)
        self.action: Optional[ActionType] = None
        for action in actions:
            self.add_item(_ChoiceButton(action, label=action.label, emoji=action.emoji,
                                        style=discord.ButtonStyle.primary))

    def choose(self, action: ActionType) -> None:
        self.action = action
        self.disable_all()
        self.stop()


class ClassSelectView(OwnedView):
    def __init__(self, user_id: int, *, timeout: float = 120.0,
                 classes: Sequence[CharacterClass] = ALL_CLASSES):
        super().__init__(user_id, timeout=timeout)
        self.selected: Optional[CharacterClass] = None
        for cls in classes:
            self.add_item(_ChoiceButton(cls, label=cls.name, emoji=cls.emoji,
                                        style=discord.ButtonStyle.secondary))

    def choose(self, character_class: CharacterClass) -> None:
        self.selected = character_class
        self.disable_all()
        self.stop()


class PaginationView(OwnedView):
    """Prev/Next pager over a fixed list of embeds."""

    def __init__(self, user_id: int, pages: List[discord.Embed], *, timeout: float = 180.0):
        super().__init__(user_id, timeout=timeout)
        if not pages:
            raise ValueError("PaginationView needs at least one page")
        self.pages = pages
        self.idx = 0
        self._sync_buttons()

    @property
    def current(self) -> discord.Embed:
        page = self.pages[self.idx]
        page.set_footer(text=f"Page {self.idx + 1}/{len(self.pages)}")
        return page

    def _sync_buttons(self) -> None:
        self.prev.disabled = self.idx <= 0
        self.next.disabled = self.idx >= len(self.pages) - 1

    @discord.ui.button(label="Prev", style=discord.ButtonStyle.secondary)
    async def prev(self, interaction: discord.Interaction, button: discord.ui.Button):
        if self.idx > 0:
            self.idx -= 1
        self._sync_buttons()
        await interaction.response.edit_message(embed=self.current, view=self)

    @discord.ui.button(label="Next", style=discord.ButtonStyle.primary)
    async def next(self, interaction: discord.Interaction, button: discord.ui.Button):
        if self.idx < len(self.pages) - 1:
            self.idx += 1
        self._sync_buttons()
        await interaction.response.edit_message(embed=self.current, view=self)
