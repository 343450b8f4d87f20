"""Pulumi dynamic providers for Bitbucket resources."""

from .group import Group, GroupProvider

__all__ = [
    "Group",
    "GroupProvider",
]
