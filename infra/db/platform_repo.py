import json
import os
import threading
from dataclasses import asdict
from typing import Any, Dict, Iterable, List, Optional

from domain.models import (
    AzureOpenAIProviderSettings,
    CopilotSettings,
    OpenAIProviderSettings,
    Platform,
    ProviderKind,
)
from domain.ports import PlatformNotFoundError, PlatformRepositoryPort

_SETTINGS_TYPES = {
    ProviderKind.OPENAI: OpenAIProviderSettings,
    ProviderKind.AZURE_OPENAI: AzureOpenAIProviderSettings,
}


def platform_to_dict(platform: Platform) -> Dict[str, Any]:
    copilot = None
    if platform.copilot_settings is not None:
        copilot = {
            "providers": {
                ProviderKind(kind).value: asdict(provider)
                for kind, provider in platform.copilot_settings.providers.items()
            }
        }
    return {"id": platform.id, "name": platform.name, "copilot_settings": copilot}


def platform_from_dict(data: Dict[str, Any]) -> Platform:
    copilot: Optional[CopilotSettings] = None
    raw = data.get("copilot_settings")
    if raw is not None:
        providers = {}
        for key, values in (raw.get("providers") or {}).items():
            kind = ProviderKind(key)
            providers[kind] = _SETTINGS_TYPES[kind](**(values or {}))
        copilot = CopilotSettings(providers=providers)
    return Platform(id=data["id"], name=data.get("name", ""), copilot_settings=copilot)


class InMemoryPlatformRepository(PlatformRepositoryPort):
    def __init__(self, platforms: Iterable[Platform] = ()):
        self._lock = threading.Lock()
        self._platforms: Dict[str, Platform] = {p.id: p for p in platforms}

    def get_one_or_throw(self, platform_id: str) -> Platform:
        with self._lock:
            platform = self._platforms.get(platform_id)
        if platform is None:
            raise PlatformNotFoundError(platform_id)
        return platform

    def save(self, platform: Platform) -> Platform:
        with self._lock:
            self._platforms[platform.id] = platform
        return platform

    def list(self) -> List[Platform]:
        with self._lock:
            return list(self._platforms.values())


class JsonPlatformRepository(PlatformRepositoryPort):
    """
    Platforms stored in a single JSON file: {"platforms": [ {...}, ... ]}.
    The file is read again on every lookup so edits made elsewhere are picked up.
    """

    def __init__(self, path: str):
        self.path = path
        self._lock = threading.Lock()

    def _read(self) -> Dict[str, Platform]:
        if not os.path.exists(self.path):
            return {}
        with open(self.path, "r", encoding="utf-8") as f:
            data = json.load(f)
        return {p["id"]: platform_from_dict(p) for p in data.get("platforms", [])}

    def _write(self, platforms: Dict[str, Platform]) -> None:
        os.makedirs(os.path.dirname(self.path) or ".", exist_ok=True)
        tmp_path = self.path + ".tmp"
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump({"platforms": [platform_to_dict(p) for p in platforms.values()]}, f, indent=2)
        os.replace(tmp_path, self.path)

    def get_one_or_throw(self, platform_id: str) -> Platform:
        platform = self._read().get(platform_id)
        if platform is None:
            raise PlatformNotFoundError(platform_id)
        return platform

    def save(self, platform: Platform) -> Platform:
        with self._lock:
            platforms = self._read()
            platforms[platform.id] = platform
            self._write(platforms)
        return platform

    def list(self) -> List[Platform]:
        return list(self._read().values())
