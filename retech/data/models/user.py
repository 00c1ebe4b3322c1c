from sqlalchemy import Column, Integer, String, UniqueConstraint
from retech.data.database import Base


class ProfileModel(Base):
    __tablename__ = "profiles"
    user_id = Column(Integer, primary_key=True)
    name = Column(String, nullable=True)
    phone = Column(String, nullable=True)


class UserRoleModel(Base):
    __tablename__ = "user_roles"
    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, nullable=False, index=True)
    role = Column(String, nullable=False, default="user")  # user, admin

    __table_args__ = (UniqueConstraint("user_id", "role", name="u_user_role"),)
