"""Goal endpoints"""

from typing import List

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session

from budget_gateway.api.v1.schemas import GoalCreate, GoalResponse, GoalUpdate
from budget_gateway.api.v1.serializers import goal_response
from budget_gateway.infrastructure.database.session import get_db
from budget_gateway.services.goals import GoalService

router = APIRouter()


@router.get("/goals/{user_id}", response_model=List[GoalResponse])
def list_goals(
    user_id: str,
    active_only: bool = Query(False),
    db: Session = Depends(get_db),
):
    return [goal_response(g) for g in GoalService(db).list_goals(user_id, active_only)]


@router.post("/goals/{user_id}", response_model=GoalResponse, status_code=201)
def create_goal(user_id: str, body: GoalCreate, db: Session = Depends(get_db)):
    return goal_response(GoalService(db).create_goal(user_id, body.model_dump(exclude_none=True)))


@router.patch("/goals/item/{goal_id}", response_model=GoalResponse)
def update_goal(goal_id: str, body: GoalUpdate, db: Session = Depends(get_db)):
    return goal_response(GoalService(db).update_goal(goal_id, body.model_dump(exclude_unset=True)))


@router.delete("/goals/item/{goal_id}", status_code=204)
def delete_goal(goal_id: str, db: Session = Depends(get_db)):
    GoalService(db).delete_goal(goal_id)
    return Response(status_code=204)
