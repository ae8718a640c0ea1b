"""Category endpoints - shared across users, deletion blocked while bills reference them"""

from typing import List

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session

from budget_gateway.api.v1.schemas import CategoryCreate, CategoryResponse, CategoryUpdate
from budget_gateway.infrastructure.database.session import get_db
from budget_gateway.services.categories import CategoryService

router = APIRouter()


@router.get("/categories", response_model=List[CategoryResponse])
def list_categories(db: Session = Depends(get_db)):
    return CategoryService(db).list_categories()


@router.post("/categories", response_model=CategoryResponse, status_code=201)
def create_category(
    body: CategoryCreate,
    user_id: str = Query(..., description="Acting user, recorded in the activity log"),
    db: Session = Depends(get_db),
):
    return CategoryService(db).create_category(user_id, body.model_dump(exclude_none=True))


@router.patch("/categories/{category_id}", response_model=CategoryResponse)
def update_category(
    category_id: str,
    body: CategoryUpdate,
    user_id: str = Query(..., description="Acting user, recorded in the activity log"),
    db: Session = Depends(get_db),
):
    return CategoryService(db).update_category(user_id, category_id, body.model_dump(exclude_unset=True))


@router.delete("/categories/{category_id}", status_code=204)
def delete_category(
    category_id: str,
    user_id: str = Query(..., description="Acting user, recorded in the activity log"),
    db: Session = Depends(get_db),
):
    """
    Delete a category.

    Returns 409 while any bill still references it.
    """
    CategoryService(db).delete_category(user_id, category_id)
    return Response(status_code=204)
