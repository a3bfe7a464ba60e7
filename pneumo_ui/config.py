# pneumo_ui/config.py

import os
from dataclasses import dataclass, field
from typing import Optional

# --- Inference Service ---
# The service base address is the only setting read from the environment.
DEFAULT_API_URL = "http://localhost:6798"

# Hard cap on files kept in batch mode; extra files are dropped silently.
DEFAULT_BATCH_LIMIT = 50

# Longest edge (px) of the thumbnails rendered in the preview grid.
DEFAULT_PREVIEW_MAX_SIZE = 512


def _env_api_url() -> str:
    return os.getenv("PNEUMO_API_URL", DEFAULT_API_URL).rstrip("/")


# ---------------------------
# Structured configuration
# ---------------------------

@dataclass(frozen=True)
class ClientConfig:
    """Client-side configuration for the classifier UI.

    Values can be overridden via environment variables:
    - PNEUMO_API_URL

    Timeouts default to ``None`` (wait indefinitely): an unresponsive
    service leaves the request in flight until it answers.
    """

    api_url: str = field(default_factory=_env_api_url)
    request_timeout: Optional[float] = None
    decode_timeout: Optional[float] = None
    batch_limit: int = DEFAULT_BATCH_LIMIT
    preview_max_size: int = DEFAULT_PREVIEW_MAX_SIZE
    log_level: str = "INFO"


def get_config() -> ClientConfig:
    """Return the default configuration (re-reading the environment)."""
    return ClientConfig()

