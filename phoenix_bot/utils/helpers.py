"""Small helpers and embed templates shared by the cogs."""
from typing import Dict, Optional
import discord

EMOJI: Dict[str, str] = {
    "gold": "🪙",
    "xp": "🔹",
    "level": "⭐",
    "health": "❤️",
    "mana": "🌀",
    "strength": "💪",
    "agility": "⚡",
    "intelligence": "🧠",
    "travel": "🗺️",
    "rest": "💤",
    "victory": "🏆",
    "defeat": "💀",
}

COLOUR_INFO = 0x3498DB
COLOUR_SUCCESS = 0x2ECC71
COLOUR_DANGER = 0xE74C3C
COLOUR_WARNING = 0xF1C40F


def make_embed(title: str, description: str, colour: Optional[int] = None) -> discord.Embed:
    """Create a small embed used by many commands.

    Args:
        title: embed title
        description: embed body
        colour: optional integer colour
    """
    e = discord.Embed(title=title, description=description)
    if colour is not None:
        e.colour = colour
    return e


def error_embed(description: str) -> discord.Embed:
    return make_embed("Error", description, COLOUR_DANGER)


def latency_embed(latency_ms: int) -> discord.Embed:
    return make_embed("Pong!", f"Latency: {latency_ms}ms")


def format_gold(amount: int) -> str:
    """Format a gold amount with emoji."""
    return f"{EMOJI['gold']} {amount}"


def format_distance(km: float) -> str:
    return f"{km:.2f} km"


def format_remaining(ms: int) -> str:
    """Render a millisecond duration as e.g. '12m 5s'."""
    total = max(int(ms) // 1000, 0)
    minutes, seconds = divmod(total, 60)
    if minutes:
        return f"{minutes}m {seconds}s"
    return f"{seconds}s"
