# app/db/models/__init__.py
from .user import User
from .board import Project, ProjectMember, BoardColumn, Task, Comment, TaskHistory
