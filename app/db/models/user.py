from sqlalchemy import Column, Integer, String, CheckConstraint
from sqlalchemy.orm import relationship
from app.db.session import Base

ROLE_ADMIN = "admin"
ROLE_DEVELOPER = "developer"
ROLES = (ROLE_ADMIN, ROLE_DEVELOPER)


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String, unique=True, index=True, nullable=False)
    name = Column(String, nullable=True)
    password_hash = Column(String, nullable=False)
    role = Column(String, nullable=False, default=ROLE_DEVELOPER)
    avatar_url = Column(String, nullable=True)
    theme = Column(String, nullable=True)  # light | dark

    __table_args__ = (
        CheckConstraint("role IN ('admin', 'developer')", name="ck_users_role"),
    )

    # Board relationships
    memberships = relationship(
        "ProjectMember", back_populates="user", cascade="all, delete-orphan", passive_deletes=True)
    comments = relationship(
        "Comment", back_populates="user", cascade="all, delete-orphan", passive_deletes=True)

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN
