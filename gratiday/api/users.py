"""User and authentication API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status

from gratiday.api.dependencies import DbDep, get_user_or_404
from gratiday.entities import Quote, User
from gratiday.schemas.stats import QuoteStats
from gratiday.schemas.user import PasswordChange, UserCreate, UserLogin, UserResponse, UserUpdate

router = APIRouter(prefix="/api/v1", tags=["users"])


@router.post("/users", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def create_user(user_data: UserCreate, db: DbDep):
    """Register a new user."""
    user = User(
        nombre=user_data.nombre,
        correo_electronico=user_data.correo_electronico,
        rol=user_data.rol,
        db=db,
    )
    return user.create(user_data.password)


@router.get("/users", response_model=list[UserResponse])
def list_users(
    db: DbDep,
    limit: Annotated[int, Query(ge=1, le=500)] = 50,
    offset: Annotated[int, Query(ge=0)] = 0,
):
    """List users, newest first."""
    return User.find_all(limit, offset, db=db)


@router.get("/users/by-email", response_model=UserResponse)
def get_user_by_email(email: str, db: DbDep):
    """Look up a user by email address."""
    user = User.find_by_email(email, db=db)
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return user


@router.get("/users/{user_id}", response_model=UserResponse)
def get_user(user: Annotated[User, Depends(get_user_or_404)]):
    """Get a user."""
    return user


@router.patch("/users/{user_id}", response_model=UserResponse)
def update_user(user_data: UserUpdate, user: Annotated[User, Depends(get_user_or_404)]):
    """Update name, email or role."""
    return user.update(user_data)


@router.put("/users/{user_id}/password", status_code=status.HTTP_204_NO_CONTENT)
def change_password(body: PasswordChange, user: Annotated[User, Depends(get_user_or_404)]):
    """Replace the user's password."""
    user.update_password(body.password)


@router.delete("/users/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(user: Annotated[User, Depends(get_user_or_404)]):
    """Delete a user that no longer owns quotes."""
    user.delete()


@router.get("/users/{user_id}/stats", response_model=QuoteStats)
def get_user_stats(user: Annotated[User, Depends(get_user_or_404)], db: DbDep):
    """Quote counts for one author."""
    return Quote.get_user_stats(user.id_user, db=db)


@router.post("/auth/login", response_model=UserResponse)
def login(credentials: UserLogin, db: DbDep):
    """Check email and password."""
    user = User.authenticate(credentials.correo_electronico, credentials.password, db=db)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password",
        )
    return user
