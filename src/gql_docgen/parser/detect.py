"""Auto-detect the input document format."""

from pathlib import Path

import yaml

POSTMAN_SCHEMA_MARKER = "schema.getpostman.com"


def detect_format(file_path: Path) -> str:
    """Detect the format of a workspace document.

    Returns: 'postman' or 'capture'.
    """
    text = file_path.read_text(encoding="utf-8")

    # YAML is a superset of JSON, so this covers both.
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError:
        return "capture"

    if isinstance(data, dict):
        info = data.get("info")
        if isinstance(info, dict):
            if "_postman_id" in info or POSTMAN_SCHEMA_MARKER in str(info.get("schema", "")):
                return "postman"

    return "capture"
