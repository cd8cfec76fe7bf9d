from __future__ import annotations
import json, os
from typing import Dict, Optional
from portwatch.domain.ports import SettingsStoragePort


class StorageLocal(SettingsStoragePort):
    """Local filesystem storage for user settings (JSON)."""

    FILENAME = "user_settings.json"

    def __init__(self, root_dir: str = ".") -> None:
        self.root = root_dir

    @property
    def settings_path(self) -> str:
        return os.path.join(self.root, self.FILENAME)

    def save_user_settings(self, payload: Dict) -> None:
        os.makedirs(self.root, exist_ok=True)
        with open(self.settings_path, "w", encoding="utf-8") as f:
            json.dump(payload, f, ensure_ascii=False, indent=2)

    def load_user_settings(self) -> Optional[Dict]:
        path = self.settings_path
        if not os.path.exists(path):
            return None
        with open(path, "r", encoding="utf-8") as f:
            payload = json.load(f)
        if not isinstance(payload, dict):
            raise ValueError(f"{path} must contain a JSON object.")
        return payload


def default_settings_dir() -> str:
    """Per-user directory for ``user_settings.json``."""
    base = os.environ.get("APPDATA") or os.environ.get("XDG_CONFIG_HOME")
    if not base:
        base = os.path.join(os.path.expanduser("~"), ".config")
    return os.path.join(base, "portwatch")
