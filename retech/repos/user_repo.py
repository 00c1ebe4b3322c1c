from sqlalchemy import select
from sqlalchemy.orm import Session
from retech.data.models.user import ProfileModel, UserRoleModel


class UserRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_profile(self, user_id: int) -> ProfileModel | None:
        return self.db.get(ProfileModel, user_id)

    def save_profile(self, profile: ProfileModel) -> ProfileModel:
        profile = self.db.merge(profile)
        self.db.commit()
        self.db.refresh(profile)
        return profile

    def has_role(self, user_id: int, role: str) -> bool:
        return self.db.execute(
            select(UserRoleModel.id).where(
                UserRoleModel.user_id == user_id,
                UserRoleModel.role == role,
            )
        ).first() is not None

    def grant_role(self, user_id: int, role: str) -> None:
        if not self.has_role(user_id, role):
            self.db.add(UserRoleModel(user_id=user_id, role=role))
            self.db.commit()
