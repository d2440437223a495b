"""Cog packages loaded by `PhoenixBot.setup_hook`."""
