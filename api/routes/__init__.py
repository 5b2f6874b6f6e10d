"""API routes package"""

from . import health, policy, pantry, agent, plans, recipes

__all__ = ["health", "policy", "pantry", "agent", "plans", "recipes"]
