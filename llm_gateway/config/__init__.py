"""Unified configuration layer for gateway clients.

Goals
-----
* Centralize defaults (endpoints, catalogues) in :mod:`.defaults`.
* Merge sources in a predictable order, later wins:
    1. Built-in defaults
    2. Optional external config file (JSON or YAML) named by PROVIDERS_CONFIG_FILE
    3. Environment variables ``<NAME>_<FIELD>`` (see :mod:`.env`)
    4. In-code overrides passed to the helper
* Provide single call sites: ``get_provider_config`` for one client and
  ``load_clients_config`` for the ordered list of configured clients.

External Config File
--------------------
JSON is tried first, then YAML (PyYAML). Structure example:

```
clients:
  - type: openai
  - type: openai-compatible
    name: groq
    models:
      - name: llama3-70b-8192
        max_input_tokens: 8192
  - type: ollama
    name: local
    api_base: http://localhost:11434
    models:
      - name: llama3
openai:
  organization_id: org-123
```

Top-level sections keyed by client name are merged into that client's
configuration; the ``clients`` list fixes which clients exist and in what
order.

Public API
----------
* get_provider_config(provider, overrides=None) -> dict
* load_clients_config() -> list[ClientConfig]
* reset_config_cache()
"""
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import yaml

from .client_config import ClientConfig, ClientExtra, ModelConfig
from .defaults import OLLAMA_DEFAULT_API_BASE, OPENAI_COMPATIBLE_PLATFORMS
from .env import env_overrides, get_env_value, is_placeholder

CONFIG_FILE_ENV = "PROVIDERS_CONFIG_FILE"

# Declaration order used when clients are discovered from the environment.
DEFAULTS: Dict[str, Dict[str, Any]] = {
    "openai": {"type": "openai"},
    "claude": {"type": "claude"},
    **{name: {"type": "openai-compatible"} for name in OPENAI_COMPATIBLE_PLATFORMS},
    "ollama": {"type": "ollama", "api_base": OLLAMA_DEFAULT_API_BASE},
    "qianwen": {"type": "qianwen"},
}

_FILE_CACHE: Optional[Dict[str, Any]] = None
_FILE_CACHE_PATH: Optional[str] = None


def reset_config_cache() -> None:
    """Forget the parsed external file (tests, config reloads)."""
    global _FILE_CACHE, _FILE_CACHE_PATH
    _FILE_CACHE = None
    _FILE_CACHE_PATH = None


def _parse_config_text(text: str) -> Dict[str, Any]:
    try:
        data = json.loads(text)
    except ValueError:
        data = yaml.safe_load(text) or {}
    return data if isinstance(data, dict) else {}


def _load_external_config() -> Dict[str, Any]:
    global _FILE_CACHE, _FILE_CACHE_PATH
    path = os.getenv(CONFIG_FILE_ENV) or ""
    if _FILE_CACHE is not None and _FILE_CACHE_PATH == path:
        return _FILE_CACHE
    data: Dict[str, Any] = {}
    if path and Path(path).is_file():
        data = _parse_config_text(Path(path).read_text(encoding="utf-8"))
    _FILE_CACHE, _FILE_CACHE_PATH = data, path
    return data


def _file_section(name: str) -> Dict[str, Any]:
    section = _load_external_config().get(name)
    return dict(section) if isinstance(section, dict) else {}


def get_provider_config(provider: str, overrides: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
    """Return the merged configuration mapping for one client name.

    Merge order (later wins): defaults -> external file section -> env vars
    -> overrides. ``None`` override values are ignored.
    """
    name = (provider or "").strip().lower()
    cfg: Dict[str, Any] = {}
    cfg |= DEFAULTS.get(name, {})
    cfg |= _file_section(name)
    cfg |= env_overrides(name)
    if overrides:
        cfg |= {k: v for k, v in overrides.items() if v is not None}
    cfg.setdefault("name", name)
    return cfg


def _client_from_entry(entry: Mapping[str, Any]) -> ClientConfig:
    kind = str(entry.get("type") or "").strip().lower()
    name = str(entry.get("name") or kind).strip().lower()
    cfg: Dict[str, Any] = {}
    cfg |= DEFAULTS.get(kind, {})
    cfg |= DEFAULTS.get(name, {})
    cfg |= _file_section(name)
    cfg |= {k: v for k, v in entry.items() if v is not None}
    cfg |= env_overrides(name)
    cfg["type"] = kind
    cfg["name"] = name
    return ClientConfig.model_validate(cfg)


def _discover_from_env() -> List[ClientConfig]:
    clients: List[ClientConfig] = []
    for name, defaults in DEFAULTS.items():
        if defaults["type"] == "ollama":
            present = get_env_value(name, "api_base") or get_env_value(name, "model")
        else:
            present = get_env_value(name, "api_key")
        if present and not is_placeholder(present):
            clients.append(ClientConfig.model_validate(get_provider_config(name)))
    return clients


def load_clients_config() -> List[ClientConfig]:
    """Return the configured clients in declaration order.

    The external file's ``clients`` list wins; without it, every known
    client whose credentials are present in the environment is configured
    (Ollama needs no key and is included when its api base or model is set).
    """
    entries = _load_external_config().get("clients")
    if isinstance(entries, list) and entries:
        return [_client_from_entry(e) for e in entries if isinstance(e, dict)]
    return _discover_from_env()


__all__ = [
    "CONFIG_FILE_ENV",
    "DEFAULTS",
    "ClientConfig",
    "ClientExtra",
    "ModelConfig",
    "get_provider_config",
    "load_clients_config",
    "reset_config_cache",
]
