"""
Bitbucket Resources - Pydantic models for declarative Bitbucket objects.
"""

from .base import Resource
from .group import GroupResource

__all__ = [
    "GroupResource",
    "Resource",
]
