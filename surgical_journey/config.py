from __future__ import annotations

import os
from pathlib import Path
from typing import List, Optional


class Settings:
    """Centralized configuration for the surgical journey backend."""

    def __init__(self) -> None:
        base_dir = Path(__file__).resolve().parent
        repo_root = base_dir.parent
        default_data = repo_root / "data" / "relevant_columns.csv"
        self.data_file: Path = Path(
            os.environ.get("SURGJ_DATA_FILE", default_data)
        ).expanduser()

        seed_raw = (os.environ.get("SURGJ_RANDOM_SEED") or "").strip()
        self.random_seed: Optional[int] = int(seed_raw) if seed_raw else None

        self.waveform_samples: int = int(
            os.environ.get("SURGJ_WAVEFORM_SAMPLES", "100")
        )
        self.log_level: str = os.environ.get("SURGJ_LOG_LEVEL", "INFO").upper()
        self.host: str = os.environ.get("SURGJ_HOST") or "127.0.0.1"
        self.port: int = int(os.environ.get("SURGJ_PORT") or "8000")

        cors = os.environ.get("SURGJ_CORS_ORIGINS", "*")
        if cors.strip() == "*":
            self.cors_origins: List[str] = ["*"]
        else:
            self.cors_origins = [
                origin.strip() for origin in cors.split(",") if origin.strip()
            ]


settings = Settings()
