"""Capture document loader.

A capture document is a JSON or YAML snapshot of a workspace as exported by
the host application::

    name: Pets API
    environment:
      - {id: env-1, name: token, value: abc}
    requests:
      - name: List pets
        headers: {Accept: application/json}
        body: {kind: graphql, query: "...", variables: "..."}
        last_exchange: {request_url: ..., status_line: ..., response_body: ...}
    groups:
      - name: Admin
        children: [...]

Group entries are told apart from request entries by their `children` key.
"""

from pathlib import Path

import yaml
from pydantic import ValidationError

from gql_docgen.errors import LoadError

from .base import Body, EnvironmentVariable, Exchange, Group, Request, Workspace


def parse_capture(file_path: Path) -> Workspace:
    """Load a capture document (JSON or YAML) into a Workspace."""
    try:
        data = yaml.safe_load(file_path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as e:
        raise LoadError(f"Cannot read capture document {file_path}: {e}") from e

    if not isinstance(data, dict):
        raise LoadError(f"Capture document {file_path} must contain a mapping")

    try:
        return _parse_workspace(data)
    except KeyError as e:
        raise LoadError(f"Invalid capture document {file_path}: missing field {e}") from e
    except (ValidationError, TypeError, AttributeError) as e:
        raise LoadError(f"Invalid capture document {file_path}: {e}") from e


def _parse_workspace(data: dict) -> Workspace:
    return Workspace(
        name=data.get("name") or "API Documentation",
        environment=[_parse_variable(v) for v in data.get("environment") or []],
        requests=[_parse_request(r) for r in data.get("requests") or []],
        groups=[_parse_group(g) for g in data.get("groups") or []],
    )


def _parse_variable(data: dict) -> EnvironmentVariable:
    value = data.get("value")
    return EnvironmentVariable(
        id=str(data["id"]),
        name=data.get("name", ""),
        value=None if value is None else str(value),
    )


def _parse_group(data: dict) -> Group:
    children: list[Group | Request] = []
    for child in data.get("children") or []:
        if "children" in child:
            children.append(_parse_group(child))
        else:
            children.append(_parse_request(child))
    return Group(name=data["name"], children=children)


def _parse_request(data: dict) -> Request:
    body = data.get("body")
    exchange = data.get("last_exchange")
    return Request(
        name=data["name"],
        method=str(data.get("method", "GET")).upper(),
        url=data.get("url", ""),
        description=data.get("description") or "",
        headers=_stringify(data.get("headers")),
        url_parameters=_stringify(data.get("url_parameters")),
        body=Body(**body) if body else None,
        last_exchange=_parse_exchange(exchange) if exchange else None,
    )


def _parse_exchange(data: dict) -> Exchange:
    return Exchange(
        request_url=data.get("request_url", ""),
        status_line=str(data.get("status_line", "")),
        response_headers=_stringify(data.get("response_headers")),
        response_body=data.get("response_body") or "",
    )


def _stringify(mapping: dict | None) -> dict[str, str]:
    # YAML turns unquoted header values like `1` or `true` into scalars.
    return {str(k): "" if v is None else str(v) for k, v in (mapping or {}).items()}
