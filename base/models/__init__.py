# base/models/__init__.py

# The mixins are abstract and stay importable from base.models.mixins only.
from .user import User, UserManager

__all__ = [
    "User",
    "UserManager",
]
