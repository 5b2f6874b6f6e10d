from __future__ import annotations

import logging
from datetime import date
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from api.dependencies import get_db
from domain.schemas.plan_schemas import GeneratePlanRequest, MealPlan, SmartPlanResult
from services.planner_service import PLAN_NOT_FOUND, SmartMealPlanner

router = APIRouter(prefix="/plans", tags=["Meal Planning"])
logger = logging.getLogger("smartpantry.api.plans")


@router.post("", response_model=SmartPlanResult, status_code=status.HTTP_201_CREATED)
async def generate_plan(body: GeneratePlanRequest, db: Session = Depends(get_db)):
    """
    Generate and store the day's meal plan for a user.

    Meals come from pantry combinations when the pantry supports at least
    three; otherwise a basic two-meal plan is returned. Either way the plan
    is upserted under plan_{user_id}_{date}.
    """
    planner = SmartMealPlanner.from_session(body.user_id, db)
    logger.info("Generating plan for user %s on %s", body.user_id, body.date or "today")
    result = await planner.generate_smart_meal_plan(body.date)

    if not result.success:
        message = result.message or "Failed to generate meal plan"
        raise HTTPException(
            status_code=(
                status.HTTP_404_NOT_FOUND
                if result.error_code == PLAN_NOT_FOUND
                else status.HTTP_503_SERVICE_UNAVAILABLE
            ),
            detail=message,
        )
    return result


@router.get("/{user_id}/{plan_date}", response_model=MealPlan)
async def get_plan(user_id: str, plan_date: date, db: Session = Depends(get_db)):
    plan = await SmartMealPlanner.from_session(user_id, db).get_current_meal_plan(plan_date)
    if plan is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"No meal plan for user {user_id} on {plan_date}",
        )
    return plan


@router.get("/{user_id}", response_model=List[MealPlan])
async def plan_history(
    user_id: str,
    days: int = Query(7, ge=1, le=90, description="Most recent plans to return"),
    db: Session = Depends(get_db),
):
    return await SmartMealPlanner.from_session(user_id, db).get_meal_plan_history(days)
