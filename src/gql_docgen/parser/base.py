"""Unified data models for captured API workspaces.

All loaders (capture documents, Postman collections) convert their input
into these standard models; the generators only ever read them.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Iterator, Union

from pydantic import BaseModel, Field

from gql_docgen.config import Settings


class BodyKind(str, Enum):
    NONE = "none"
    JSON = "json"
    FORM = "form"
    GRAPHQL = "graphql"


class Body(BaseModel):
    """A request body. Exactly one kind is active."""

    kind: BodyKind = BodyKind.NONE
    text: str = ""  # JSON literal or form-encoded string
    query: str = ""  # GraphQL query text
    variables: str | None = None  # GraphQL variables payload, may embed /* disabled */ keys

    def is_empty(self) -> bool:
        if self.kind == BodyKind.NONE:
            return True
        if self.kind == BodyKind.GRAPHQL:
            return not self.query.strip() and not (self.variables or "").strip()
        # Empty JSON and form bodies still render their own block.
        return False


class Exchange(BaseModel):
    """Snapshot of the most recent execution of a request."""

    model_config = {"frozen": True}

    request_url: str
    status_line: str
    response_headers: dict[str, str] = {}
    response_body: str = ""


class Request(BaseModel):
    """A single captured request."""

    name: str
    method: str = "GET"
    url: str = ""
    description: str = ""
    headers: dict[str, str] = {}
    url_parameters: dict[str, str] = {}
    body: Body | None = None
    last_exchange: Exchange | None = None

    def get_headers(self) -> dict[str, str]:
        return dict(self.headers)

    def get_url_parameters(self) -> dict[str, str]:
        return dict(self.url_parameters)

    def get_body(self) -> Body | None:
        return self.body

    def get_last_exchange(self) -> Exchange | None:
        return self.last_exchange


class Group(BaseModel):
    """A folder of requests and nested groups, in host order."""

    name: str
    children: list[Union[Group, Request]] = []

    def get_children(self) -> list[Group | Request]:
        return list(self.children)


class EnvironmentVariable(BaseModel):
    id: str
    name: str = ""
    value: str | None = None

    def get_current_value(self) -> str | None:
        return self.value


class Workspace(BaseModel):
    """The whole captured document: root requests, root groups, environment."""

    name: str = "API Documentation"
    environment: list[EnvironmentVariable] = []
    requests: list[Request] = []
    groups: list[Group] = []

    def get_root_requests(self) -> list[Request]:
        return list(self.requests)

    def get_root_groups(self) -> list[Group]:
        return list(self.groups)

    def iter_requests(self) -> Iterator[Request]:
        """Yield every request depth-first, in traversal order."""
        yield from self.requests
        for group in self.groups:
            yield from _iter_group(group)

    def find_requests(self, names: tuple[str, ...] | list[str]) -> list[Request]:
        """Return requests whose name matches one of `names`, in traversal order."""
        wanted = set(names)
        return [r for r in self.iter_requests() if r.name in wanted]


def _iter_group(group: Group) -> Iterator[Request]:
    for child in group.children:
        if isinstance(child, Group):
            yield from _iter_group(child)
        else:
            yield child


class RenderContext(BaseModel):
    """Everything one render needs. Created per `generate` call, never shared."""

    workspace: Workspace
    author: str = ""
    now: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    settings: Settings = Field(default_factory=Settings)

    def get_environment_variable_by_id(self, variable_id: str) -> EnvironmentVariable | None:
        for variable in self.workspace.environment:
            if variable.id == variable_id:
                return variable
        return None


Group.model_rebuild()
