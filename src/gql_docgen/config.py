"""Generator settings.

Defaults live here; an optional YAML file overrides them and the
GQL_DOCGEN_AUTHOR environment variable overrides the file's author.
"""

import os
from pathlib import Path

import yaml
from pydantic import BaseModel, ValidationError

from gql_docgen.errors import LoadError

AUTHOR_ENV_VAR = "GQL_DOCGEN_AUTHOR"
DEFAULT_FOOTER = "Last updated [date], by [user]."
DEFAULT_MAX_RESOLVE_DEPTH = 64


class Settings(BaseModel):
    author: str = ""
    footer_template: str = DEFAULT_FOOTER
    max_resolve_depth: int = DEFAULT_MAX_RESOLVE_DEPTH
    variables_fallback: str = "[Unable to resolve variables: {reason}]"


def load_settings(path: Path | None = None) -> Settings:
    """Build Settings from defaults, an optional YAML file and the environment."""
    data: dict = {}
    if path is not None:
        try:
            loaded = yaml.safe_load(path.read_text(encoding="utf-8"))
        except (OSError, yaml.YAMLError) as e:
            raise LoadError(f"Cannot read settings file {path}: {e}") from e
        if loaded is not None and not isinstance(loaded, dict):
            raise LoadError(f"Settings file {path} must contain a mapping")
        data.update(loaded or {})

    author = os.getenv(AUTHOR_ENV_VAR)
    if author:
        data["author"] = author

    try:
        return Settings(**data)
    except ValidationError as e:
        raise LoadError(f"Invalid settings: {e}") from e
