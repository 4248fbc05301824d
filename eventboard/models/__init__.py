"""
Database models package
"""

from .event import Event
from .category import Category
from .post import Post
from .interest import Interest
from .backoffice_user import BackofficeUser

__all__ = ["Event", "Category", "Post", "Interest", "BackofficeUser"]
