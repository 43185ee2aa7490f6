"""Fenced code blocks, optionally inside a <details> disclosure widget."""


def render_block(language: str, content: str, title: str = "More info", collapsed: bool = False) -> str:
    """Wrap `content` in a fenced block tagged `language`.

    Callers substitute a sentinel for empty content; nothing is checked here.
    """
    block = f"```{language}\n{content}\n```"
    if not collapsed:
        return block
    # The blank line after <summary> is required for the fence to render.
    return f"\n<details>\n<summary>{title}</summary>\n\n{block}\n</details>\n\n"
