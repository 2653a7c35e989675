"""discord.py adapters implementing the core ports."""
