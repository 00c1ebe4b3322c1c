from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from retech.data.database import get_db
from retech.services.user_service import UserService
from retech.domain.schemas import UserCreate, UserRead

router = APIRouter(prefix="/users", tags=["users"])


@router.post("/", response_model=UserRead)
def save_user(payload: UserCreate, db: Session = Depends(get_db)):
    return UserService(db).save_user(payload)


@router.get("/{user_id}", response_model=UserRead)
def get_user(user_id: int, db: Session = Depends(get_db)):
    service = UserService(db)
    try:
        return service.get_user(user_id)
    except ValueError:
        # no profile yet, the identity still exists
        return UserRead(id=user_id, is_admin=service.is_admin(user_id))
