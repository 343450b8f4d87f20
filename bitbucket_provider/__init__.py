"""
Bitbucket Provider - Bitbucket workspace groups as Pulumi resources.

Declare groups as pydantic-validated resources and let the Pulumi engine
reconcile them through a dynamic provider that talks to the Bitbucket API.
"""

from .client import BitbucketClient
from .models import Group, GroupConfig, GroupState, format_group_id, parse_group_id
from .settings import BitbucketSettings, get_settings, reload_settings

__version__ = "0.1.0"
__all__ = [
    "BitbucketClient",
    "BitbucketSettings",
    "Group",
    "GroupConfig",
    "GroupState",
    "format_group_id",
    "get_settings",
    "parse_group_id",
    "reload_settings",
]
