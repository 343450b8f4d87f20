"""Base resource classes for the Bitbucket provider."""

import logging
from typing import Self

import pulumi
from pydantic import BaseModel, PrivateAttr

logger = logging.getLogger(__name__)


class Resource(BaseModel):
    """Base resource class - all declarative resources inherit from this.

    A resource is a validated description of desired remote state. Calling
    to_pulumi() registers the matching Pulumi resource with the engine, which
    then drives the provider's create/read/update/delete operations.

    Dependencies:
    Resources can declare ordering on other resources via .depends_on(). Once
    every dependency has been compiled, its Pulumi resource is added to the
    depends_on list of this resource's ResourceOptions.

    Attributes:
        name: Display name of the remote object
        _dependencies: Private list of resources this one must follow
        _pulumi_resource: Pulumi resource created by to_pulumi()
    """

    name: str

    _dependencies: list["Resource"] = PrivateAttr(default_factory=list)
    _pulumi_resource: pulumi.Resource | None = PrivateAttr(default=None)

    def depends_on(self, *resources: "Resource") -> Self:
        """Declare that this resource must be deployed after others.

        Args:
            *resources: One or more Resource objects

        Returns:
            Self for method chaining

        Raises:
            TypeError: If any argument is not a Resource instance

        Example:
            admins = GroupResource(workspace="acme", name="Admins")
            devs = GroupResource(workspace="acme", name="Developers")
            devs.depends_on(admins)
        """
        for resource in resources:
            if not isinstance(resource, Resource):
                raise TypeError(
                    f"Can only depend on Resource objects, got {type(resource).__name__}"
                )
            if resource is self:
                raise ValueError(f"Resource '{self.name}' cannot depend on itself")

            if any(resource is dep for dep in self._dependencies):
                logger.warning(
                    f"Resource '{self.name}' already depends on '{resource.name}', skipping"
                )
                continue

            self._dependencies.append(resource)
            logger.debug(f"{self.name} depends on {resource.name}")

        return self

    @property
    def dependencies(self) -> list["Resource"]:
        return list(self._dependencies)

    def _build_dependency_options(self) -> pulumi.ResourceOptions | None:
        """Build Pulumi ResourceOptions from declared dependencies.

        Dependencies that have not been compiled yet are skipped with a
        warning, so resources should be compiled in dependency order.

        Returns:
            pulumi.ResourceOptions with depends_on set if any dependency has a
            Pulumi resource, None otherwise
        """
        depends_on = []
        for dep in self._dependencies:
            if dep._pulumi_resource is None:
                logger.warning(
                    f"Dependency '{dep.name}' of '{self.name}' is not compiled yet"
                )
                continue
            depends_on.append(dep._pulumi_resource)

        if depends_on:
            return pulumi.ResourceOptions(depends_on=depends_on)

        return None

    def to_pulumi(self) -> pulumi.Resource:
        """Create the Pulumi resource for this resource.

        Returns:
            Pulumi Resource object
        """
        raise NotImplementedError(
            f"{self.__class__.__name__} must implement to_pulumi()"
        )
