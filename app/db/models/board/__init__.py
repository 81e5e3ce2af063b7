# app/db/models/board/__init__.py
from .project import Project
from .project_member import ProjectMember
from .column import BoardColumn
from .task import Task
from .comment import Comment
from .task_history import TaskHistory
