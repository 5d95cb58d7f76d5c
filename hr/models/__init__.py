# hr/models/__init__.py
from .branch import Branch
from .team import Team
from .employee import Employee

__all__ = [
    "Branch",
    "Team",
    "Employee",
]
