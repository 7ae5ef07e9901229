"""Configuration and environment settings for the version guard."""

from __future__ import annotations

import os

from dotenv import load_dotenv


load_dotenv()

def _env_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}

PRIMARY_COMPONENT = "python"

# Release catalog settings (empty URL disables the catalog)
CATALOG_URL = os.getenv("ENSURE_VERSION_CATALOG_URL", "")
CATALOG_WAIT = _env_bool("ENSURE_VERSION_CATALOG_WAIT", True)
REQUEST_TIMEOUT = int(os.getenv("REQUEST_TIMEOUT", "10"))
USER_AGENT = os.getenv("USER_AGENT", "ensure-version/0.1")

# Upper bounds for synthesized upgrade candidates
MINOR_SCAN_LIMIT = int(os.getenv("MINOR_SCAN_LIMIT", "100"))
PATCH_SCAN_LIMIT = int(os.getenv("PATCH_SCAN_LIMIT", "500"))

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
