"""
Domain mappers package.
Handles transformation between ORM models and DTOs (Data Transfer Objects).
"""

from domain.mappers.plan_mapper import ProfileMapper, MealPlanMapper

__all__ = ["ProfileMapper", "MealPlanMapper"]
