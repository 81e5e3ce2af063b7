from sqlalchemy import Column, Integer, String, ForeignKey, DateTime, JSON
from sqlalchemy.orm import relationship
from app.db.session import Base, utcnow

TASK_CREATED = "task_created"
TASK_UPDATED = "task_updated"
TASK_MOVED = "task_moved"
TASK_DELETED = "task_deleted"
COMMENT_ADDED = "comment_added"

ACTIONS = (TASK_CREATED, TASK_UPDATED, TASK_MOVED, TASK_DELETED, COMMENT_ADDED)


class TaskHistory(Base):
    __tablename__ = "task_history"

    id = Column(Integer, primary_key=True, index=True)
    action = Column(String, nullable=False)
    payload = Column(JSON, nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, index=True)

    # Foreign Keys
    task_id = Column(Integer, ForeignKey("tasks.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)  # null for system actions

    # Relationships
    task = relationship("Task", back_populates="history")
    user = relationship("User")

    @property
    def user_name(self):
        return self.user.name if self.user else None

    @property
    def user_email(self):
        return self.user.email if self.user else None
