"""
Pytest configuration and fixtures for Bitbucket provider tests.
"""

import json
from urllib.parse import parse_qs

import httpx
import pytest

from bitbucket_provider.client import BitbucketClient
from bitbucket_provider.pulumi_providers.group import GroupProvider

BASE_URL = "https://api.bitbucket.org/"


class FakeBitbucket:
    """In-memory stand-in for the Bitbucket 1.0 groups API.

    Used as an httpx.MockTransport handler. Every request is recorded, and
    ``overrides`` maps (method, path) to a canned response.
    """

    def __init__(self):
        self.groups: dict[tuple[str, str], dict] = {}
        self.requests: list[httpx.Request] = []
        self.overrides: dict[tuple[str, str], httpx.Response] = {}

    def add_group(self, workspace: str, **group) -> dict:
        self.groups[(workspace, group["slug"])] = group
        return group

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)

        key = (request.method, request.url.path)
        if key in self.overrides:
            return self.overrides[key]

        parts = request.url.path.strip("/").split("/")
        if parts[:2] != ["1.0", "groups"]:
            return httpx.Response(404, text="Not Found")

        if len(parts) == 3 and request.method == "POST":
            return self._create(parts[2], request)

        if len(parts) == 4:
            group_key = (parts[2], parts[3])
            if group_key not in self.groups:
                return httpx.Response(
                    404, json={"error": {"message": "Group not found"}}
                )
            if request.method == "GET":
                return httpx.Response(200, json=self.groups[group_key])
            if request.method == "PUT":
                self.groups[group_key].update(json.loads(request.content))
                return httpx.Response(200, json=self.groups[group_key])
            if request.method == "DELETE":
                del self.groups[group_key]
                return httpx.Response(204)

        return httpx.Response(405, text="Method Not Allowed")

    def _create(self, workspace: str, request: httpx.Request) -> httpx.Response:
        form = parse_qs(request.content.decode())
        name = form["name"][0]
        group = self.add_group(
            workspace,
            name=name,
            slug=name.lower().replace(" ", "-"),
            auto_add=False,
            permission=None,
        )
        return httpx.Response(200, json=group)


@pytest.fixture
def bitbucket():
    """Provide a fresh fake Bitbucket API."""
    return FakeBitbucket()


@pytest.fixture
def client(bitbucket):
    """Provide a client wired to the fake API."""
    client = BitbucketClient(
        BASE_URL, "user", "secret", transport=httpx.MockTransport(bitbucket)
    )
    yield client
    client.close()


@pytest.fixture
def provider(client):
    """Provide a group provider using the fake-backed client."""
    return GroupProvider(client=client)
