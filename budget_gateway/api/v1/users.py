"""User provisioning endpoints"""

import bcrypt
from fastapi import APIRouter, Depends
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from budget_gateway.api.v1.schemas import UserCreate, UserResponse
from budget_gateway.domain.exceptions import ConflictError, NotFoundError
from budget_gateway.infrastructure.database.session import get_db
from budget_gateway.infrastructure.database.repositories import UserRepository

router = APIRouter()


@router.post("/users", response_model=UserResponse, status_code=201)
def create_user(body: UserCreate, db: Session = Depends(get_db)):
    """Provision a user; usernames are unique and passwords are stored as bcrypt hashes"""
    users = UserRepository(db)
    if users.get_by_username(body.username) is not None:
        raise ConflictError(f"Username '{body.username}' is already taken")

    password_hash = bcrypt.hashpw(body.password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")
    try:
        user = users.create(username=body.username, password_hash=password_hash, email=body.email, name=body.name)
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError(f"Username '{body.username}' is already taken")
    return user


@router.get("/users/{user_id}", response_model=UserResponse)
def get_user(user_id: str, db: Session = Depends(get_db)):
    user = UserRepository(db).get(user_id)
    if user is None:
        raise NotFoundError("user", user_id)
    return user
