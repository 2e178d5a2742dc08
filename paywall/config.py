"""Centralised settings for the paywall decision engine.

All runtime configuration is resolved here in one place.  Values can be
overridden via environment variables or a `.env` file in the project root
(loaded automatically when this module is imported).
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Load .env from the project root (one level up from this package)
_env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_env_path, override=False)


@dataclass
class Settings:
    # ------------------------------------------------------------------
    # Policy
    # ------------------------------------------------------------------
    policy_path: Path = field(
        default_factory=lambda: Path(os.environ.get("PAYWALL_POLICY", "paywall.yaml"))
    )

    # ------------------------------------------------------------------
    # HTML parsing
    # ------------------------------------------------------------------
    html_parser: str = field(
        default_factory=lambda: os.environ.get("PAYWALL_HTML_PARSER", "html.parser")
    )

    # ------------------------------------------------------------------
    # Logging
    # ------------------------------------------------------------------
    log_level: str = field(
        default_factory=lambda: os.environ.get("PAYWALL_LOG_LEVEL", "WARNING").upper()
    )


# Module-level singleton, import this everywhere:
#   from paywall.config import settings
settings = Settings()
