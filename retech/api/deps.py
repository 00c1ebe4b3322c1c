# retech/api/deps.py
from fastapi import Depends, HTTPException, Query
from sqlalchemy.orm import Session

from retech.data.database import get_db
from retech.services.user_service import UserService


def current_user_id(user_id: int = Query(..., gt=0)) -> int:
    # identity comes from the identity provider, sign-in itself is not handled here
    return user_id


def require_admin(
    user_id: int = Depends(current_user_id),
    db: Session = Depends(get_db),
) -> int:
    """Server-side role check, the only one that counts."""
    if not UserService(db).is_admin(user_id):
        raise HTTPException(status_code=403, detail="Admin role required")
    return user_id
