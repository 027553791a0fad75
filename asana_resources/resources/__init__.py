from ..registry import default_registry as registry
from . import users, workspaces
from .workspace import Workspace
from .user import User
from .project import Project
from .task import Task
from .tag import Tag

__all__ = (
    'registry',
    'users',
    'workspaces',
    'Workspace',
    'User',
    'Project',
    'Task',
    'Tag',
)
