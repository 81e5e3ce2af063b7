from sqlalchemy import Column, Integer, String, Text, ForeignKey, DateTime, CheckConstraint
from sqlalchemy.orm import relationship
from app.db.session import Base, utcnow

PRIORITIES = ("low", "medium", "high")


class Task(Base):
    __tablename__ = "tasks"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=True, default="")
    priority = Column(String, nullable=False, default="medium")
    tag = Column(String, nullable=True, default="")
    story_points = Column(Integer, nullable=True)
    seq = Column(Integer, nullable=False)        # per-project creation counter
    position = Column(Integer, nullable=False)   # dense within column
    created_at = Column(DateTime(timezone=True), default=utcnow)

    # Foreign Keys
    project_id = Column(Integer, ForeignKey("projects.id", ondelete="CASCADE"), nullable=False, index=True)
    column_id = Column(Integer, ForeignKey("columns.id", ondelete="CASCADE"), nullable=False, index=True)
    assignee_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)

    __table_args__ = (
        CheckConstraint("priority IN ('low', 'medium', 'high')", name="ck_tasks_priority"),
    )

    # Relationships
    project = relationship("Project", back_populates="tasks")
    column = relationship("BoardColumn", back_populates="tasks")
    assignee = relationship("User", foreign_keys=[assignee_id])

    comments = relationship(
        "Comment", back_populates="task", cascade="all, delete-orphan", passive_deletes=True)
    history = relationship(
        "TaskHistory", back_populates="task", cascade="all, delete-orphan", passive_deletes=True)

    @property
    def assignee_name(self):
        return self.assignee.name if self.assignee else None

    @property
    def assignee_avatar(self):
        return self.assignee.avatar_url if self.assignee else None

    @property
    def project_code(self):
        return self.project.code if self.project else None

    def snapshot(self) -> dict:
        """Field values tracked by the task_updated history diff."""
        return {
            "title": self.title,
            "description": self.description,
            "priority": self.priority,
            "assignee_id": self.assignee_id,
            "tag": self.tag,
            "story_points": self.story_points,
        }
