"""
Dragonbane Character Generator.

Procedurally generates characters for the Dragonbane tabletop RPG, derives
their skill levels and character sheet, and optionally enriches them with
LLM-written narrative and stores them in SQLite.
"""

__version__ = "0.1.0"
