"""
Client configuration.

Precedence for every setting: explicit argument > environment > default.

Environment
-----------
DATACUBE_API_KEY   API key sent as ``X-Api-Key`` (required)
DATACUBE_API_URL   Base URL of the API (default: public v1 endpoint)
DATACUBE_TIMEOUT   Request timeout in seconds (default: 30)
"""

from __future__ import annotations

from dataclasses import dataclass
import json
import os
from pathlib import Path
from typing import Any

from datacube.sdk.errors import CatalogError, ConfigError

__all__ = [
    "DEFAULT_API_URL",
    "DEFAULT_TIMEOUT_S",
    "ClientConfig",
    "load_catalog_file",
]

DEFAULT_API_URL = "https://api.datacube.com.br/v1/"
DEFAULT_TIMEOUT_S = 30.0
USER_AGENT = "DataCube-SDK (Python)"


@dataclass(frozen=True)
class ClientConfig:
    api_key: str
    base_url: str = DEFAULT_API_URL
    timeout: float = DEFAULT_TIMEOUT_S

    @classmethod
    def from_env(
        cls,
        api_key: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
    ) -> ClientConfig:
        """
        Build a config from explicit values, falling back to the environment.

        Raises
        ------
        ConfigError
            If no API key is given and ``DATACUBE_API_KEY`` is unset, or the
            timeout in the environment is not a number.
        """
        key = api_key or os.environ.get("DATACUBE_API_KEY")
        if not key:
            raise ConfigError(
                "No API key: pass api_key=... or set DATACUBE_API_KEY."
            )
        url = base_url or os.environ.get("DATACUBE_API_URL") or DEFAULT_API_URL
        if timeout is None:
            raw = os.environ.get("DATACUBE_TIMEOUT")
            try:
                timeout = float(raw) if raw else DEFAULT_TIMEOUT_S
            except ValueError as exc:
                raise ConfigError(f"DATACUBE_TIMEOUT is not a number: {raw!r}") from exc
        # relative paths ("execute", "status") are joined onto the base
        if not url.endswith("/"):
            url += "/"
        return cls(api_key=key, base_url=url, timeout=timeout)


def load_catalog_file(path: Path) -> list[dict[str, Any]]:
    """
    Read raw flow records from a JSON file.

    The file holds either a list of records or an object with a ``flows``
    list, matching the shape returned by the flow directory.
    """
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        raise CatalogError(f"Cannot read catalog file {path}: {exc}") from exc
    if isinstance(data, dict):
        data = data.get("flows")
    if not isinstance(data, list):
        raise CatalogError(f"Catalog file {path} must hold a list of flows")
    return data
