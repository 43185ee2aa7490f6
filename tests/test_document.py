from datetime import datetime, timezone
from unittest.mock import patch

from gql_docgen.generator.document import DocumentAssembler
from gql_docgen.generator.request_doc import build_request_doc
from gql_docgen.parser.base import Group, RenderContext, Request, Workspace

NOW = datetime(2026, 10, 17, 12, 0, 0, tzinfo=timezone.utc)


def _make_workspace() -> Workspace:
    return Workspace(
        name="Pets API",
        requests=[Request(name="Ping")],
        groups=[
            Group(name="Pets", children=[
                Request(name="List pets"),
                Group(name="Admin", children=[Request(name="Delete pet")]),
            ]),
            Group(name="Empty"),
        ],
    )


def _make_context() -> RenderContext:
    return RenderContext(workspace=_make_workspace(), author="ana", now=NOW)


class TestDocumentAssembler:
    def test_single_request_rendered_directly(self):
        context = _make_context()
        request = context.workspace.groups[0].children[0]
        result = DocumentAssembler().generate(context, [request])
        assert result == build_request_doc(request, context)

    def test_whole_workspace_has_title(self):
        result = DocumentAssembler().generate(_make_context())
        assert result.startswith("# Pets API\n\n")

    def test_traversal_order(self):
        result = DocumentAssembler().generate(_make_context())
        positions = [
            result.index("### Ping"),
            result.index("\n## Pets\n"),
            result.index("### List pets"),
            result.index("\n## Admin\n"),
            result.index("### Delete pet"),
            result.index("\n## Empty\n"),
        ]
        assert positions == sorted(positions)

    def test_several_selected_requests_render_whole_workspace(self):
        context = _make_context()
        result = DocumentAssembler().generate(context, list(context.workspace.iter_requests()))
        assert result.startswith("# Pets API")

    def test_failing_request_does_not_stop_others(self):
        def flaky(request, context):
            if request.name == "List pets":
                raise RuntimeError("boom")
            return build_request_doc(request, context)

        with patch("gql_docgen.generator.document.build_request_doc", side_effect=flaky):
            result = DocumentAssembler().generate(_make_context())

        assert "### List pets\n\n<!-- rendering failed -->" in result
        assert "### Delete pet" in result
        assert "### Ping" in result
