"""File-based archive for sequenced route runs."""

from __future__ import annotations

import json
import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from ..config import settings

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9_.-]+")


class RouteArchive:
    """Stores each sequencing run in its own timestamped directory under ``<root>/routes``."""

    def __init__(self, root: Path | None = None) -> None:
        self.root = (root or settings.data_root).resolve()
        self.routes_root = self.root / "routes"
        self.routes_root.mkdir(parents=True, exist_ok=True)

    def make_run_directory(self, label: str) -> Path:
        timestamp = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%S%fZ")
        safe_label = _UNSAFE_CHARS.sub("_", label).strip("_") or "route"
        path = self.routes_root / f"{safe_label}_{timestamp}"
        attempt = 1
        while path.exists():
            path = self.routes_root / f"{safe_label}_{timestamp}_{attempt}"
            attempt += 1
        path.mkdir(parents=True, exist_ok=False)
        return path

    def save_run(self, label: str, payload: dict[str, Any], csv_content: str) -> Path:
        """Write ``route.json`` and ``route.csv`` into a fresh run directory and return it."""
        run_dir = self.make_run_directory(label)
        with (run_dir / "route.json").open("w", encoding="utf-8") as handle:
            json.dump(payload, handle, ensure_ascii=False, indent=2)
        with (run_dir / "route.csv").open("w", encoding="utf-8", newline="") as handle:
            handle.write(csv_content)
        return run_dir
