"""Group data models and resource identity helpers."""

import json
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import DecodeError, InvalidIdentityError

Permission = Literal["read", "write", "admin"]

PERMISSIONS: tuple[str, ...] = ("read", "write", "admin")


def empty_to_none(value: Any) -> Any:
    if value == "":
        return None
    return value


class Group(BaseModel):
    """A Bitbucket group as sent to and received from the 1.0 groups API.

    Attributes:
        name: Display name
        slug: URL-safe identifier assigned by the server on create
        auto_add: Whether new workspace members join the group automatically
        permission: Default repository permission granted to members. Values
            outside read/write/admin sent by the API are kept as-is
    """

    model_config = ConfigDict(extra="ignore")

    name: str = ""
    slug: str | None = None
    auto_add: bool | None = None
    permission: str | None = None

    @field_validator("permission", mode="before")
    @classmethod
    def empty_permission_is_unset(cls, value: Any) -> Any:
        return empty_to_none(value)

    def to_payload(self) -> dict[str, Any]:
        """JSON body for PUT requests. Unset fields are omitted."""
        return self.model_dump(exclude_none=True)


class GroupConfig(BaseModel):
    """Desired configuration of a group, as declared by the user.

    ``auto_add`` is tri-state: None means the user never set it, which is
    different from an explicit False.
    """

    workspace: str = Field(min_length=1)
    name: str = Field(min_length=1)
    auto_add: bool | None = None
    permission: Permission | None = None

    @field_validator("permission", mode="before")
    @classmethod
    def empty_permission_is_unset(cls, value: Any) -> Any:
        return empty_to_none(value)

    @classmethod
    def from_props(cls, props: dict[str, Any]) -> "GroupConfig":
        """Build a config from Pulumi input properties."""
        return cls(
            workspace=props.get("workspace") or "",
            name=props.get("name") or "",
            auto_add=props.get("auto_add"),
            permission=props.get("permission"),
        )

    def to_group(self) -> Group:
        group = Group(name=self.name)
        if self.auto_add is not None:
            group.auto_add = self.auto_add
        if self.permission:
            group.permission = self.permission
        return group


class GroupState(BaseModel):
    """Local state of a group after reconciling with the API."""

    workspace: str
    slug: str
    name: str
    auto_add: bool = False
    permission: str | None = None

    @property
    def id(self) -> str:
        return format_group_id(self.workspace, self.slug)

    @classmethod
    def from_group(cls, workspace: str, group: Group) -> "GroupState":
        return cls(
            workspace=workspace,
            slug=group.slug or "",
            name=group.name,
            auto_add=bool(group.auto_add),
            permission=group.permission,
        )

    def to_outs(self) -> dict[str, Any]:
        return self.model_dump()


def parse_group_id(id: str) -> tuple[str, str]:
    """Split a resource ID into (workspace, slug).

    Raises:
        InvalidIdentityError: If the ID is not exactly two non-empty segments
    """
    parts = id.split("/")
    if len(parts) != 2 or not all(parts):
        raise InvalidIdentityError(
            f"unexpected format of ID ({id!r}), expected WORKSPACE-ID/GROUP-SLUG-ID"
        )
    return parts[0], parts[1]


def format_group_id(workspace: str, slug: str) -> str:
    return f"{workspace}/{slug}"


def decode_group(body: bytes | str) -> Group:
    """Decode a JSON response body into a Group.

    Raises:
        DecodeError: If the body is not a JSON object describing a group
    """
    try:
        data = json.loads(body)
    except ValueError as e:
        raise DecodeError(f"malformed group JSON: {e}") from e

    if not isinstance(data, dict):
        raise DecodeError(f"expected a JSON object, got {type(data).__name__}")

    try:
        return Group.model_validate(data)
    except ValidationError as e:
        raise DecodeError(f"invalid group payload: {e}") from e
