"""
Centralized settings for the pricing tool.

Values come from environment variables (a local ``.env`` file is loaded by
the CLI entry point) and fall back to the defaults below.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from pathlib import Path

# When installed in editable mode the project root is the repo root.
DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"


@dataclass(frozen=True)
class Settings:
    data_dir: Path
    default_gst_percentage: Decimal = Decimal("3")
    log_level: str = "WARNING"
    product_code_prefix: str = "AJ"

    @classmethod
    def from_env(cls) -> Settings:
        data_dir = os.getenv("JEWELRY_DATA_DIR", "").strip()
        gst_raw = os.getenv("JEWELRY_DEFAULT_GST", "3").strip()
        try:
            gst = Decimal(gst_raw)
        except InvalidOperation:
            raise ValueError(f"JEWELRY_DEFAULT_GST must be a number, got {gst_raw!r}") from None
        return cls(
            data_dir=Path(data_dir).expanduser() if data_dir else DEFAULT_DATA_DIR,
            default_gst_percentage=gst,
            log_level=os.getenv("JEWELRY_LOG_LEVEL", "WARNING").strip().upper(),
            product_code_prefix=os.getenv("JEWELRY_PRODUCT_CODE_PREFIX", "AJ").strip() or "AJ",
        )


def get_settings() -> Settings:
    """Read settings from the current environment."""
    return Settings.from_env()
