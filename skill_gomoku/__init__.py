"""
Skill Gomoku - Five-in-a-row with one-shot skills.

An authoritative, in-memory game session engine for a two-player board
game in which each side may cast a shared pool of single-use skills that
bend the normal rules:
- Board state and five-in-a-row detection
- Turn order with freeze-driven skips
- Skill resolution (remove, freeze, random placement, rewind, reset, restore)
- Snapshot history for rewind/restore
"""

__version__ = "0.1.0"
