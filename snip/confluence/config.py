"""Reading and writing the Confluence connection settings."""

from __future__ import annotations

import json
import os
from dataclasses import asdict, dataclass, fields
from pathlib import Path

CONFIG_FILENAME = "confluence_config.json"


@dataclass
class ConfluenceConfig:
    """Where Confluence lives and how to authenticate to it."""

    url: str = ""
    email: str = ""
    api_token: str = ""
    space: str = ""


def get_config_path(base_dir: str | Path | None = None) -> Path:
    """Return the settings file path, creating its directory.

    ``base_dir`` defaults to ``~/.snip``.
    """
    directory = Path(base_dir) if base_dir is not None else Path.home() / ".snip"
    directory.mkdir(parents=True, exist_ok=True)
    return directory / CONFIG_FILENAME


def load_config(base_dir: str | Path | None = None) -> ConfluenceConfig:
    """Load the settings; an absent file gives empty settings."""
    path = get_config_path(base_dir)
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return ConfluenceConfig()
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ValueError(f"failed to parse configuration: {exc}") from exc
    if not isinstance(data, dict):
        raise ValueError("failed to parse configuration: expected an object")
    known = {f.name for f in fields(ConfluenceConfig)}
    return ConfluenceConfig(
        **{key: str(value) for key, value in data.items() if key in known and value is not None}
    )


def save_config(config: ConfluenceConfig, base_dir: str | Path | None = None) -> Path:
    """Write the settings, readable by the owner only, and return the file path."""
    path = get_config_path(base_dir)
    path.write_text(json.dumps(asdict(config), indent=2), encoding="utf-8")
    os.chmod(path, 0o600)
    return path