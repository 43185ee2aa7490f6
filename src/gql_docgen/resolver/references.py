"""Resolution of GraphQL variables payloads.

A variables payload is JSON whose values may be dynamic-value references
such as::

    {"identifier": "com.luckymarmot.EnvironmentVariableDynamicValue",
     "data": {"environmentVariable": "<variable id>"}}

References can also arrive serialized inside string values, or as a list of
string/reference components that together make up one string. Everything is
turned into plain JSON: environment variables are looked up through the
render context, every other kind becomes a fixed placeholder.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Union

from gql_docgen.resolver.lenient import is_unresolved, parse_lenient

if TYPE_CHECKING:
    from gql_docgen.parser.base import RenderContext

logger = logging.getLogger(__name__)

IDENTIFIER_PREFIX = "com.luckymarmot."


class ResolutionError(ValueError):
    """Raised while walking a variables tree; never escapes this module."""


class ReferenceKind(str, Enum):
    ENVIRONMENT_VARIABLE = "EnvironmentVariableDynamicValue"
    REQUEST_VARIABLE = "RequestVariableDynamicValue"
    LOCAL_VALUE = "LocalValueDynamicValue"
    HASH = "HashDynamicValue"
    COMPRESSION = "CompressionDynamicValue"
    HMAC = "HMACDynamicValue"
    BASIC_AUTH = "BasicAuthDynamicValue"
    ESCAPE_SEQUENCE = "EscapeSequenceDynamicValue"
    S3_HEADER = "AmazonS3HeaderDynamicValue"
    CUSTOM = "CustomDynamicValue"
    JSON = "JSONDynamicValue"
    UNRECOGNIZED = ""

    @property
    def identifier(self) -> str:
        return IDENTIFIER_PREFIX + self.value

    @property
    def placeholder(self) -> str:
        return f"[{self.value} is not yet supported.]"


UNSUPPORTED_KINDS = frozenset(
    kind
    for kind in ReferenceKind
    if kind not in (ReferenceKind.ENVIRONMENT_VARIABLE, ReferenceKind.UNRECOGNIZED)
)

_KINDS_BY_IDENTIFIER = {
    kind.identifier: kind for kind in ReferenceKind if kind is not ReferenceKind.UNRECOGNIZED
}


def identify_reference(identifier: str) -> ReferenceKind:
    return _KINDS_BY_IDENTIFIER.get(identifier.strip(), ReferenceKind.UNRECOGNIZED)


# Value variants


@dataclass(frozen=True)
class Literal:
    value: Any  # str, int, float, bool or None


@dataclass(frozen=True)
class Sequence:
    items: tuple[Node, ...]


@dataclass(frozen=True)
class Mapping:
    entries: tuple[tuple[str, Node], ...]


@dataclass(frozen=True)
class Reference:
    kind: ReferenceKind
    identifier: str
    data: Any


Node = Union[Literal, Sequence, Mapping, Reference]


def _looks_like_reference(value: dict) -> bool:
    return isinstance(value.get("identifier"), str) and "data" in value


def to_node(value: Any) -> Node:
    """Convert parsed JSON into the variant tree."""
    if isinstance(value, dict):
        if _looks_like_reference(value):
            identifier = value["identifier"]
            return Reference(identify_reference(identifier), identifier, value["data"])
        return Mapping(tuple((str(k), to_node(v)) for k, v in value.items()))
    if isinstance(value, list):
        return Sequence(tuple(to_node(item) for item in value))
    return Literal(value)


def contains_reference(node: Node) -> bool:
    if isinstance(node, Reference):
        return True
    if isinstance(node, Sequence):
        return any(contains_reference(item) for item in node.items)
    if isinstance(node, Mapping):
        return any(contains_reference(v) for _, v in node.entries)
    return False


def resolve_reference(ref: Reference, context: RenderContext) -> str:
    kind = ref.kind
    if kind is ReferenceKind.ENVIRONMENT_VARIABLE:
        if not isinstance(ref.data, dict):
            raise ResolutionError(f"{ref.identifier} carries no environment variable id")
        variable = context.get_environment_variable_by_id(ref.data.get("environmentVariable"))
        if variable is None:
            return "null"
        return variable.get_current_value() or "null"
    if kind in UNSUPPORTED_KINDS:
        return kind.placeholder
    return ref.identifier


def _resolve_string(text: str, context: RenderContext, depth: int) -> Any:
    parsed = parse_lenient(text)
    if is_unresolved(text, parsed) or not isinstance(parsed, (dict, list)):
        return text
    node = to_node(parsed)
    if not contains_reference(node):
        return text
    if isinstance(node, Sequence):
        # Dynamic-string components: serialize back into one string.
        return "".join(_as_text(resolve(item, context, depth + 1)) for item in node.items)
    return resolve(node, context, depth + 1)


def _as_text(value: Any) -> str:
    if isinstance(value, str):
        return value
    return json.dumps(value, ensure_ascii=False)


def resolve(node: Node, context: RenderContext, depth: int = 0) -> Any:
    """Resolve every reference in `node`, returning plain JSON-compatible data."""
    if depth > context.settings.max_resolve_depth:
        raise ResolutionError(f"nesting deeper than {context.settings.max_resolve_depth} levels")

    if isinstance(node, Reference):
        return resolve_reference(node, context)
    if isinstance(node, Sequence):
        return [resolve(item, context, depth + 1) for item in node.items]
    if isinstance(node, Mapping):
        resolved = {}
        for key, value in node.entries:
            resolved_key = _as_text(_resolve_string(key, context, depth))
            resolved[resolved_key] = resolve(value, context, depth + 1)
        return resolved
    if isinstance(node.value, str):
        return _resolve_string(node.value, context, depth)
    return node.value


def render_graphql_variables(payload: Any, context: RenderContext) -> str:
    """Render a variables payload as pretty JSON.

    Returns "" when there is nothing to show, the stripped raw text when the
    payload is not a JSON object, and a short fallback string when
    resolution fails.
    """
    if not isinstance(payload, str) or not payload.strip():
        return ""

    try:
        parsed = parse_lenient(payload)
        if not isinstance(parsed, dict):
            return payload.strip()
        output = resolve(to_node(parsed), context)
        if not isinstance(output, dict):
            # The whole payload was itself a single reference.
            return _as_text(output)
        if not output:
            return ""
        return json.dumps(output, indent=2, ensure_ascii=False)
    except Exception as e:
        logger.warning("Could not resolve GraphQL variables: %s", e)
        return context.settings.variables_fallback.replace("{reason}", str(e))
