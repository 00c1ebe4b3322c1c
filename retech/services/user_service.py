from sqlalchemy.orm import Session
from retech.data.models.user import ProfileModel
from retech.domain.schemas import AppRole, UserCreate, UserRead
from retech.repos.user_repo import UserRepo


class UserService:
    def __init__(self, db: Session):
        self.repo = UserRepo(db)

    def save_user(self, payload: UserCreate) -> UserRead:
        profile = self.repo.save_profile(
            ProfileModel(user_id=payload.id, name=payload.name, phone=payload.phone)
        )
        return self._read(profile.user_id, profile)

    def get_user(self, user_id: int) -> UserRead:
        profile = self.repo.get_profile(user_id)
        if not profile:
            raise ValueError("User not found")
        return self._read(user_id, profile)

    def is_admin(self, user_id: int) -> bool:
        return self.repo.has_role(user_id, AppRole.ADMIN.value)

    def grant_admin(self, user_id: int) -> None:
        self.repo.grant_role(user_id, AppRole.ADMIN.value)

    def _read(self, user_id: int, profile: ProfileModel) -> UserRead:
        return UserRead(
            id=user_id,
            name=profile.name,
            phone=profile.phone,
            is_admin=self.is_admin(user_id),
        )
