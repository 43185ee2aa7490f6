"""Document assembler: walks the workspace tree and joins request docs."""

import logging

from gql_docgen.generator.request_doc import build_request_doc
from gql_docgen.parser.base import Group, RenderContext, Request

logger = logging.getLogger(__name__)


class DocumentAssembler:
    """Builds the final Markdown document for a workspace."""

    def generate(self, context: RenderContext, requests: list[Request] | None = None) -> str:
        """Render `requests`, or the whole workspace when not exactly one is given."""
        requests = requests or []
        if len(requests) == 1:
            return self._render_request(requests[0], context)

        workspace = context.workspace
        parts = [f"# {workspace.name}\n\n"]
        parts.extend(self._render_request(r, context) for r in workspace.get_root_requests())
        parts.extend(self._render_group(g, context) for g in workspace.get_root_groups())
        return "\n".join(parts)

    def _render_group(self, group: Group, context: RenderContext) -> str:
        children = []
        for child in group.get_children():
            if isinstance(child, Group):
                children.append(self._render_group(child, context))
            else:
                children.append(self._render_request(child, context))
        return "\n".join([f"\n## {group.name}\n", *children])

    def _render_request(self, request: Request, context: RenderContext) -> str:
        try:
            return build_request_doc(request, context)
        except Exception:
            logger.warning("Failed to render request %r", request.name, exc_info=True)
            return f"### {request.name}\n\n<!-- rendering failed -->\n"
