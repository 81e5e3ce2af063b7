from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import relationship
from app.db.session import Base, utcnow


class Project(Base):
    __tablename__ = "projects"

    id = Column(Integer, primary_key=True, index=True)
    code = Column(String, unique=True, index=True, nullable=False)
    name = Column(String, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow)

    # Relationships
    members = relationship(
        "ProjectMember", back_populates="project", cascade="all, delete-orphan", passive_deletes=True)
    columns = relationship(
        "BoardColumn", back_populates="project", cascade="all, delete-orphan",
        passive_deletes=True, order_by="BoardColumn.position")
    tasks = relationship(
        "Task", back_populates="project", cascade="all, delete-orphan", passive_deletes=True)
