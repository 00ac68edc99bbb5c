"""
Design (storage.py)
- Purpose: Load and save the target list to/from disk (JSON).
- Inputs: Path (from get_targets_path()), list of TargetConfig for save/seed_template.
- Outputs: list[TargetConfig] on load; None on save.
- Side effects: Reads/writes file. Load failures raise ConfigError: the monitor must not
  start with zero targets.
- Thread-safety: Call at startup only.
"""

import json
import os
import sys
from pathlib import Path
from typing import List

from .config import TARGETS_ENV_VAR, TARGETS_FILENAME
from .errors import ConfigError
from .models import TargetConfig

# Written by seed_template() when no target file exists yet
TEMPLATE_TARGETS = [
    TargetConfig(id="gateway", address="192.168.1.1"),
    TargetConfig(id="dns", address="1.1.1.1"),
]


def get_targets_path() -> Path:
    """
    Resolve path for targets.json. $PINGWATCH_TARGETS wins; otherwise prefer the app data
    dir (APPDATA on Windows, XDG config elsewhere) when a file exists there, and fall back
    to the project directory.
    """
    override = os.environ.get(TARGETS_ENV_VAR)
    if override:
        return Path(override).expanduser()

    if sys.platform == "win32":
        appdata = os.environ.get("APPDATA")
        base = Path(appdata) / "pingwatch" if appdata else None
    else:
        xdg = os.environ.get("XDG_CONFIG_HOME")
        base = (Path(xdg) if xdg else Path.home() / ".config") / "pingwatch"
    if base is not None and (base / TARGETS_FILENAME).exists():
        return base / TARGETS_FILENAME

    return Path(__file__).resolve().parent.parent / TARGETS_FILENAME


def load_targets(path: Path) -> List[TargetConfig]:
    """
    Load targets from a JSON list of {"id": ..., "address": ...}, keeping file order.
    Raises ConfigError on a missing/unreadable file, bad JSON, or malformed entries.
    """
    if not path.exists():
        raise ConfigError(f"Target file not found: {path}")
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigError(f"Could not read {path}: {e}") from e
    if not isinstance(data, list):
        raise ConfigError(f"{path}: expected a JSON list of targets")

    targets: List[TargetConfig] = []
    for index, item in enumerate(data):
        if not isinstance(item, dict):
            raise ConfigError(f"{path}: entry {index} is not an object")
        target_id = str(item.get("id", "")).strip()
        address = str(item.get("address", "")).strip()
        if not target_id or not address:
            raise ConfigError(f"{path}: entry {index} needs both 'id' and 'address'")
        targets.append(TargetConfig(id=target_id, address=address))
    if not targets:
        raise ConfigError(f"{path}: no targets configured")
    return targets


def save_targets(targets: List[TargetConfig], path: Path) -> None:
    """Save target list to JSON file. OSError propagates to the caller."""
    data = [{"id": t.id, "address": t.address} for t in targets]
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)


def seed_template(path: Path) -> bool:
    """
    Purpose: Write TEMPLATE_TARGETS to `path` if nothing is there yet, so the operator has
             a file to edit instead of a bare "not found".
    Outputs: True if a template was written, False if the file already existed.
    """
    if path.exists():
        return False
    save_targets(TEMPLATE_TARGETS, path)
    return True
