"""Per-request Markdown: the default layout or marker substitution."""

import logging
import re
from datetime import timezone
from email.utils import format_datetime

from gql_docgen.generator.markers import MARKER_PATTERN, Marker, Section, classify, has_markers
from gql_docgen.generator.sections import GENERATORS
from gql_docgen.parser.base import RenderContext, Request

logger = logging.getLogger(__name__)

BLANK_LINES = re.compile(r"\n\s*\n")


def collapse_blank_lines(text: str) -> str:
    return BLANK_LINES.sub("\n\n", text)


def footer(context: RenderContext) -> str:
    now = context.now
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    date = format_datetime(now.astimezone(timezone.utc), usegmt=True)
    user = context.author or context.settings.author
    text = context.settings.footer_template.replace("[date]", date).replace("[user]", user)
    return f"\n<small>{text}</small>"


def build_request_doc(request: Request, context: RenderContext) -> str:
    """Render one request.

    Descriptions without markers get the default layout; otherwise each
    marker is replaced by the section it names.
    """
    description = request.description
    if not description.strip() or not has_markers(description):
        return _default_doc(request, context)
    return _custom_doc(request, context)


def _default_doc(request: Request, context: RenderContext) -> str:
    doc = f"### {request.name}\n"
    doc += f"\n{request.description}\n"

    doc += "\n#### Request\n"
    doc += GENERATORS[Section.REQUEST_HEADERS](request, context, True)
    doc += GENERATORS[Section.REQUEST_PARAMS](request, context, True)
    doc += GENERATORS[Section.REQUEST_BODY](request, context, True)

    if request.get_last_exchange() is not None:
        doc += "\n#### Response\n"
        doc += GENERATORS[Section.RESPONSE_HEADERS](request, context, True)
        doc += GENERATORS[Section.RESPONSE_BODY](request, context, True)

    doc += "\n---\n"
    doc += footer(context)
    return collapse_blank_lines(doc)


def _custom_doc(request: Request, context: RenderContext) -> str:
    rendered: dict[Marker, str] = {}

    def substitute(match: re.Match) -> str:
        marker = classify(match)
        if marker not in rendered:
            logger.debug("Expanding %s (collapsed=%s) for %r", marker.section.value, marker.collapsed, request.name)
            rendered[marker] = GENERATORS[marker.section](request, context, marker.collapsed)
        return rendered[marker]

    doc = f"### {request.name}\n\n"
    doc += MARKER_PATTERN.sub(substitute, request.description)
    return collapse_blank_lines(doc)
