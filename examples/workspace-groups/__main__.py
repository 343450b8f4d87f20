"""
Workspace Groups Example - Declare Bitbucket groups for a workspace.

Credentials are read from BITBUCKET_USERNAME and BITBUCKET_PASSWORD
(an app password with group admin scope). Run with `pulumi up`.

The "legacy" group already exists in Bitbucket and is adopted through
import_id instead of being created.
"""

import pulumi

from bitbucket_provider.resources import GroupResource

WORKSPACE = "acme"

admins = GroupResource(workspace=WORKSPACE, name="Administrators", permission="admin")

developers = GroupResource(
    workspace=WORKSPACE,
    name="Developers",
    auto_add=True,
    permission="write",
).depends_on(admins)

legacy = GroupResource(
    workspace=WORKSPACE,
    name="Legacy Readers",
    permission="read",
    import_id=f"{WORKSPACE}/legacy-readers",
)

for resource in (admins, developers, legacy):
    group = resource.to_pulumi()
    pulumi.export(f"{resource.name} slug", group.slug)
