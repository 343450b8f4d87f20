"""Group resource for managing Bitbucket workspace groups."""

from typing import Any

import pulumi
from pydantic import Field, field_validator, model_validator

from bitbucket_provider.errors import InvalidIdentityError
from bitbucket_provider.models import Permission, empty_to_none, parse_group_id

from .base import Resource


class GroupResource(Resource):
    """Group resource - creates and manages a group inside a workspace.

    Attributes:
        workspace: Workspace slug that owns the group (changing it replaces the group)
        name: Display name of the group
        auto_add: Add new workspace members automatically (None leaves it unset)
        permission: Default repository permission granted to members
        resource_name: Pulumi resource name (defaults to "<workspace>-<name>")
        import_id: Existing group to adopt, as "<workspace>/<slug>"

    Examples:
        Basic group:
        >>> GroupResource(workspace="acme", name="Engineers")

        Group with write access that new members join automatically:
        >>> GroupResource(
        ...     workspace="acme",
        ...     name="Developers",
        ...     auto_add=True,
        ...     permission="write",
        ... )

        Adopt a group created outside of Pulumi:
        >>> GroupResource(workspace="acme", name="Admins", import_id="acme/admins")
    """

    workspace: str = Field(min_length=1)
    name: str = Field(min_length=1)
    auto_add: bool | None = None
    permission: Permission | None = None
    resource_name: str | None = None
    import_id: str | None = None

    @field_validator("permission", mode="before")
    @classmethod
    def empty_permission_is_unset(cls, value: Any) -> Any:
        return empty_to_none(value)

    @model_validator(mode="after")
    def validate_import_id(self):
        """import_id must be a valid ID inside the same workspace."""
        if self.import_id is not None:
            try:
                workspace, _slug = parse_group_id(self.import_id)
            except InvalidIdentityError as e:
                raise ValueError(str(e)) from e
            if workspace != self.workspace:
                raise ValueError(
                    f"import_id workspace '{workspace}' does not match '{self.workspace}'"
                )
        return self

    def get_resource_name(self) -> str:
        return self.resource_name or f"{self.workspace}-{self.name}"

    def to_pulumi(self) -> pulumi.Resource:
        """Create Pulumi Group resource using the dynamic provider.

        Returns:
            Pulumi Group resource
        """
        from bitbucket_provider.pulumi_providers.group import Group

        opts = self._build_dependency_options()
        if self.import_id is not None:
            import_opts = pulumi.ResourceOptions(import_=self.import_id)
            opts = pulumi.ResourceOptions.merge(opts, import_opts)

        group = Group(
            self.get_resource_name(),
            workspace=self.workspace,
            group_name=self.name,
            auto_add=self.auto_add,
            permission=self.permission,
            opts=opts,
        )

        # Store for dependency tracking
        self._pulumi_resource = group

        return group
