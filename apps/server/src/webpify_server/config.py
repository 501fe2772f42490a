"""Configuration management for the webpify server."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class Config:
    """Server configuration loaded from environment variables."""

    host: str = "0.0.0.0"
    port: int = 3000
    output_dir: Path = Path("output")
    fetch_timeout: float = 30.0

    @classmethod
    def load(cls) -> Config:
        """Load configuration from environment variables."""
        return cls(
            host=os.getenv("WEBPIFY_HOST", "0.0.0.0"),
            port=int(os.getenv("WEBPIFY_PORT", "3000")),
            output_dir=Path(os.getenv("WEBPIFY_OUTPUT_DIR", "output")),
            fetch_timeout=float(os.getenv("WEBPIFY_FETCH_TIMEOUT", "30.0")),
        )

    def ensure_directories(self) -> None:
        """Create the output directory if missing. Existing files are kept."""
        self.output_dir.mkdir(parents=True, exist_ok=True)
