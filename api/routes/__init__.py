"""API routes package"""

from . import auth, users, goals, meals, entries, summaries, health

__all__ = ["auth", "users", "goals", "meals", "entries", "summaries", "health"]
