"""Postman Collection v2.1 loader.

Folders become Groups, items become Requests; the first saved example
response of an item becomes its last exchange.
"""

import json
from pathlib import Path
from urllib.parse import quote, urlencode

from pydantic import ValidationError

from gql_docgen.errors import LoadError

from .base import Body, BodyKind, EnvironmentVariable, Exchange, Group, Request, Workspace


def parse_postman(file_path: Path) -> Workspace:
    """Parse a Postman Collection v2.1 file into a Workspace."""
    try:
        collection = json.loads(file_path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        raise LoadError(f"Cannot read Postman collection {file_path}: {e}") from e

    if not isinstance(collection, dict):
        raise LoadError(f"Postman collection {file_path} must contain an object")

    try:
        return _parse_collection(collection)
    except KeyError as e:
        raise LoadError(f"Invalid Postman collection {file_path}: missing field {e}") from e
    except (ValidationError, TypeError, AttributeError) as e:
        raise LoadError(f"Invalid Postman collection {file_path}: {e}") from e


def _parse_collection(collection: dict) -> Workspace:
    requests: list[Request] = []
    groups: list[Group] = []
    for child in _parse_items(collection.get("item", [])):
        if isinstance(child, Group):
            groups.append(child)
        else:
            requests.append(child)

    return Workspace(
        name=collection.get("info", {}).get("name") or "API Documentation",
        environment=[
            EnvironmentVariable(id=v["key"], name=v["key"], value=_text(v.get("value")))
            for v in collection.get("variable", [])
            if "key" in v
        ],
        requests=requests,
        groups=groups,
    )


def _parse_items(items: list[dict]) -> list[Group | Request]:
    """Recursively parse items (supports folders)."""
    children: list[Group | Request] = []
    for item in items:
        if "item" in item:
            children.append(Group(name=item.get("name", ""), children=_parse_items(item["item"])))
        elif "request" in item:
            children.append(_parse_request(item))
    return children


def _parse_request(item: dict) -> Request:
    req = item["request"]
    if isinstance(req, str):
        # Shorthand form: the request is just its URL.
        req = {"method": "GET", "url": req}
    url = req.get("url", {})
    if isinstance(url, str):
        url = {"raw": url}

    responses = item.get("response") or []
    return Request(
        name=item.get("name", ""),
        method=req.get("method", "GET").upper(),
        url=url.get("raw", ""),
        description=_description(req.get("description") or item.get("description")),
        headers=_parse_headers(req.get("header", [])),
        url_parameters=_parse_query_params(url.get("query", [])),
        body=_parse_body(req.get("body")),
        last_exchange=_parse_response(responses[0], url.get("raw", "")) if responses else None,
    )


def _description(value: str | dict | None) -> str:
    if isinstance(value, dict):
        return value.get("content", "")
    return value or ""


def _parse_headers(headers: list[dict]) -> dict[str, str]:
    return {h["key"]: _text(h.get("value")) for h in headers if "key" in h and not h.get("disabled")}


def _parse_query_params(query: list[dict]) -> dict[str, str]:
    return {q["key"]: _text(q.get("value")) for q in query if "key" in q and not q.get("disabled")}


def _parse_body(body: dict | None) -> Body | None:
    if not body:
        return None
    mode = body.get("mode")
    if mode == "raw":
        return Body(kind=BodyKind.JSON, text=body.get("raw", ""))
    if mode == "urlencoded":
        fields = [(f["key"], _text(f.get("value"))) for f in body.get("urlencoded", []) if not f.get("disabled")]
        return Body(kind=BodyKind.FORM, text=urlencode(fields, quote_via=quote))
    if mode == "graphql":
        graphql = body.get("graphql", {})
        return Body(kind=BodyKind.GRAPHQL, query=graphql.get("query", ""), variables=graphql.get("variables"))
    return None


def _parse_response(response: dict, request_url: str) -> Exchange:
    status = f"{response.get('code', '')} {response.get('status', '')}".strip()
    return Exchange(
        request_url=request_url,
        status_line=status,
        response_headers=_parse_headers(response.get("header") or []),
        response_body=response.get("body") or "",
    )


def _text(value) -> str:
    return "" if value is None else str(value)
