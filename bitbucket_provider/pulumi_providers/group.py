"""Pulumi dynamic provider for Bitbucket group resources.

This module provides a Pulumi dynamic provider that manages workspace groups
through the Bitbucket 1.0 groups API. The resource ID is ``WORKSPACE/SLUG``.
"""

import logging
from typing import Any, Optional

import pulumi
from pulumi import Input, Output
from pulumi.dynamic import (
    CheckFailure,
    CheckResult,
    CreateResult,
    DiffResult,
    ReadResult,
    ResourceProvider,
    UpdateResult,
)
from pydantic import ValidationError

from bitbucket_provider.client import BitbucketClient
from bitbucket_provider.errors import DecodeError, EmptyResponseError, RemoteError
from bitbucket_provider.models import (
    PERMISSIONS,
    GroupConfig,
    GroupState,
    decode_group,
    format_group_id,
    parse_group_id,
)

logger = logging.getLogger(__name__)

# Fields updated in place; a workspace change requires a new group
UPDATABLE_FIELDS = ["name", "auto_add", "permission"]


class GroupProvider(ResourceProvider):
    """Dynamic provider for Bitbucket groups.

    Pulumi serializes the provider into the engine, so by default no client is
    held and one is built from settings on first use. Pass ``client`` to
    supply an already configured BitbucketClient.
    """

    def __init__(self, client: BitbucketClient | None = None):
        self._client = client

    @property
    def client(self) -> BitbucketClient:
        if self._client is None:
            self._client = BitbucketClient.from_settings()
        return self._client

    def create_group(self, config: GroupConfig) -> GroupState:
        """
        Create a group and read it back.

        Only the name is sent in the form body; auto_add and permission
        reach Bitbucket on the next update.

        Args:
            config: Desired group configuration

        Returns:
            GroupState as stored by Bitbucket

        Raises:
            RemoteError: If the API call fails or the group vanished right after creation
            DecodeError: If the response does not carry a slug
        """
        group = config.to_group()
        logger.debug(f"Group request: {group!r}")

        response = self.client.post_form(
            f"1.0/groups/{config.workspace}", {"name": group.name}
        )
        logger.debug(f"Group create response JSON: {response.text}")

        created = decode_group(response.content)
        logger.debug(f"Group create response decoded: {created!r}")
        if not created.slug:
            raise DecodeError(
                f"create response for group {group.name!r} has no slug"
            )

        id = format_group_id(config.workspace, created.slug)
        state = self.read_group(id)
        if state is None:
            raise RemoteError(
                f"group ({id}) not found right after creation", status_code=404
            )
        return state

    def read_group(self, id: str) -> GroupState | None:
        """
        Fetch a group by ID.

        Args:
            id: Resource ID (WORKSPACE/SLUG)

        Returns:
            GroupState, or None if the group no longer exists

        Raises:
            InvalidIdentityError: If the ID is malformed
            EmptyResponseError: If the API returned no body
            DecodeError: If the body is not valid group JSON
        """
        workspace, slug = parse_group_id(id)

        try:
            response = self.client.get(f"1.0/groups/{workspace}/{slug}")
        except RemoteError as e:
            if e.status_code == 404:
                logger.warning(f"Group ({id}) not found, removing from state")
                return None
            raise

        if not response.content:
            raise EmptyResponseError(f"error reading group ({id}): empty response")

        logger.debug(f"Group response JSON: {response.text}")
        group = decode_group(response.content)
        logger.debug(f"Group response decoded: {group!r}")

        return GroupState.from_group(workspace, group)

    def update_group(self, id: str, config: GroupConfig) -> GroupState:
        """
        Replace the mutable fields of a group and read it back.

        Raises:
            RemoteError: If the API call fails or the group is gone afterwards
        """
        workspace, slug = parse_group_id(id)

        group = config.to_group()
        logger.debug(f"Group request: {group!r}")
        self.client.put(f"1.0/groups/{workspace}/{slug}/", group.to_payload())

        state = self.read_group(id)
        if state is None:
            raise RemoteError(f"group ({id}) not found after update", status_code=404)
        return state

    def delete_group(self, id: str) -> None:
        """Delete a group. A missing group is reported as RemoteError."""
        workspace, slug = parse_group_id(id)
        self.client.delete(f"1.0/groups/{workspace}/{slug}")

    def check(self, _olds: dict[str, Any], news: dict[str, Any]) -> CheckResult:
        """
        Validate inputs before any API call.

        Args:
            _olds: Old input properties
            news: New input properties

        Returns:
            CheckResult with the inputs and any validation failures
        """
        failures = []
        try:
            GroupConfig.from_props(news)
        except ValidationError as e:
            for error in e.errors():
                field = str(error["loc"][0]) if error["loc"] else "name"
                if field == "permission":
                    reason = f"expected permission to be one of {list(PERMISSIONS)}"
                else:
                    reason = f"{field}: {error['msg']}"
                failures.append(CheckFailure(field, reason))

        return CheckResult(news, failures)

    def create(self, props: dict[str, Any]) -> CreateResult:
        """
        Create a group.

        Args:
            props: Resource properties

        Returns:
            CreateResult with WORKSPACE/SLUG as ID
        """
        state = self.create_group(GroupConfig.from_props(props))
        return CreateResult(id_=state.id, outs=state.to_outs())

    def read(self, id: str, props: dict[str, Any]) -> ReadResult:
        """
        Refresh a group from the API. Also used when importing.

        Args:
            id: Resource ID (WORKSPACE/SLUG)
            props: Current resource properties (may be empty on import)

        Returns:
            ReadResult with current outputs, or an empty ID if the group is gone
        """
        state = self.read_group(id)
        if state is None:
            return ReadResult(id_="", outs={})
        return ReadResult(id_=id, outs=state.to_outs())

    def update(
        self, id: str, old_props: dict[str, Any], new_props: dict[str, Any]
    ) -> UpdateResult:
        """
        Update a group.

        Args:
            id: Resource ID (WORKSPACE/SLUG)
            old_props: Old resource properties
            new_props: New resource properties

        Returns:
            UpdateResult with refreshed outputs
        """
        state = self.update_group(id, GroupConfig.from_props(new_props))
        return UpdateResult(outs=state.to_outs())

    def delete(self, id: str, props: dict[str, Any]) -> None:
        """
        Delete a group.

        Args:
            id: Resource ID (WORKSPACE/SLUG)
            props: Resource properties
        """
        self.delete_group(id)

    def diff(
        self, id: str, old_props: dict[str, Any], new_props: dict[str, Any]
    ) -> DiffResult:
        """
        Check what changed between old and new properties.

        Args:
            id: Resource ID (WORKSPACE/SLUG)
            old_props: Old resource properties
            new_props: New resource properties

        Returns:
            DiffResult indicating if changes require replacement
        """
        changes = []
        replaces = []

        if old_props.get("workspace") != new_props.get("workspace"):
            changes.append("workspace")
            replaces.append("workspace")

        for field in UPDATABLE_FIELDS:
            old_val = old_props.get(field)
            new_val = new_props.get(field)
            # Unset inputs leave the remote value alone
            if new_val is None or new_val == "":
                continue
            if old_val != new_val:
                changes.append(field)

        return DiffResult(
            changes=len(changes) > 0,
            replaces=replaces,
            stables=["slug"],
            delete_before_replace=True,
        )


class Group(pulumi.dynamic.Resource):
    """
    A Pulumi dynamic resource for managing Bitbucket groups.

    Args:
        name: Resource name
        workspace: Workspace slug that owns the group
        group_name: Display name of the group
        auto_add: Add new workspace members automatically (unset if None)
        permission: Default permission, one of read/write/admin (unset if None)
        opts: Standard Pulumi resource options
    """

    workspace: Output[str]
    name: Output[str]
    slug: Output[str]
    auto_add: Output[bool]
    permission: Output[Optional[str]]

    def __init__(
        self,
        name: str,
        workspace: Input[str],
        group_name: Input[str],
        auto_add: Input[bool] | None = None,
        permission: Input[str] | None = None,
        opts: Optional[pulumi.ResourceOptions] = None,
    ):
        """
        Initialize Group resource.

        Args:
            name: Resource name
            workspace: Workspace slug that owns the group
            group_name: Display name of the group
            auto_add: Add new workspace members automatically
            permission: Default permission
            opts: Standard Pulumi resource options
        """
        super().__init__(
            GroupProvider(),
            name,
            {
                "workspace": workspace,
                "name": group_name,
                "auto_add": auto_add,
                "permission": permission,
                "slug": None,  # Computed on create
            },
            opts,
        )
