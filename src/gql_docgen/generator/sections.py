"""Content generators for each insertable section of a request document."""

import json
import logging
import re
from urllib.parse import quote, urlencode

from graphql import GraphQLError, OperationDefinitionNode, parse, print_ast

from gql_docgen.generator.blocks import render_block
from gql_docgen.generator.markers import Section
from gql_docgen.parser.base import BodyKind, RenderContext, Request
from gql_docgen.resolver.references import render_graphql_variables

logger = logging.getLogger(__name__)

GRAPHQL_TITLE = "GraphQL:"
OPERATION_TITLES = {"query": "Query", "mutation": "Mutation", "subscription": "Subscription"}


def format_headers(headers: dict[str, str]) -> str:
    return "".join(f"{name}:  {str(value).strip()}\n" for name, value in headers.items())


def request_headers(request: Request, context: RenderContext, collapsed: bool = False) -> str:
    content = format_headers(request.get_headers()).strip()
    return render_block("text", content or "null", "Request Headers", collapsed)


def request_url_parameters(request: Request, context: RenderContext, collapsed: bool = False) -> str:
    encoded = urlencode(request.get_url_parameters(), quote_via=quote)
    return render_block("text", encoded or "Empty URL Parameters", "Request URL Parameters", collapsed)


def request_body(request: Request, context: RenderContext, collapsed: bool = False) -> str:
    title = "Request Body"
    body = request.get_body()

    if body is None or body.is_empty():
        return render_block("text", "Empty Body", title, collapsed)
    if body.kind == BodyKind.JSON:
        return render_block("json", body.text or "null", title, collapsed)
    if body.kind == BodyKind.FORM:
        return render_block("text", body.text, title, collapsed)
    if body.kind == BodyKind.GRAPHQL:
        variables = render_graphql_variables(body.variables, context)
        return graphql_blocks(body.query or "{}", variables, collapsed)
    return ""


def format_graphql(query: str) -> tuple[str, list[str]]:
    """Pretty-print `query` and list its operation types.

    Falls back to the raw text and keyword detection when graphql-core
    cannot parse it.
    """
    try:
        document = parse(query)
    except GraphQLError as e:
        logger.debug("GraphQL query not parseable, using raw text: %s", e.message)
        operations = [op for op in ("query", "mutation") if re.search(op, query)]
        return query, operations

    operations = []
    for definition in document.definitions:
        if isinstance(definition, OperationDefinitionNode):
            operation = definition.operation.value
            if operation not in operations:
                operations.append(operation)
    return print_ast(document), operations


def graphql_blocks(query: str, variables: str, collapsed: bool = False) -> str:
    content = ""

    if variables:
        content += render_block("json", variables, f"{GRAPHQL_TITLE} Variables", collapsed) + "\n\n"

    formatted, operations = format_graphql(query)
    for operation in operations:
        title = f"{GRAPHQL_TITLE} {OPERATION_TITLES[operation]}"
        content += render_block("graphql", formatted, title, collapsed) + "\n\n"

    return content + "\n"


def response_headers(request: Request, context: RenderContext, collapsed: bool = False) -> str:
    exchange = request.get_last_exchange()
    if exchange is None:
        return ""

    content = f"Request URL: {exchange.request_url}"
    content += f"\nStatus Code: {exchange.status_line}"
    content += "\n\n"
    content += format_headers(exchange.response_headers)
    return render_block("text", content.rstrip("\n"), "Response Headers", collapsed)


def response_body(request: Request, context: RenderContext, collapsed: bool = False) -> str:
    exchange = request.get_last_exchange()
    if exchange is None or not exchange.response_body.strip():
        return ""

    try:
        parsed = json.loads(exchange.response_body)
    except ValueError:
        return render_block("text", exchange.response_body.strip(), "Response Body", collapsed)
    return render_block("json", json.dumps(parsed, indent=2, ensure_ascii=False), "Response Body", collapsed)


GENERATORS = {
    Section.REQUEST_HEADERS: request_headers,
    Section.REQUEST_PARAMS: request_url_parameters,
    Section.REQUEST_BODY: request_body,
    Section.RESPONSE_HEADERS: response_headers,
    Section.RESPONSE_BODY: response_body,
}
