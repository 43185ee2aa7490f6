from gql_docgen.generator.blocks import render_block


class TestRenderBlock:
    def test_plain_block(self):
        assert render_block("json", '{"a": 1}') == '```json\n{"a": 1}\n```'

    def test_collapsed_block(self):
        result = render_block("text", "hello", "Request Headers", collapsed=True)
        assert result == (
            "\n<details>\n"
            "<summary>Request Headers</summary>\n"
            "\n"
            "```text\nhello\n```\n"
            "</details>\n\n"
        )

    def test_default_title(self):
        assert "<summary>More info</summary>" in render_block("text", "x", collapsed=True)

    def test_empty_content_is_not_replaced(self):
        assert render_block("text", "") == "```text\n\n```"
