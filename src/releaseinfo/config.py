"""
config.py — Global, live-mutable configuration loaded from environment variables.

Settings can be changed at runtime via POST /config without restarting the
HTTP service; library callers read the `cfg` singleton.
"""

import os
import threading

_TRUTHY = {"1", "true", "yes", "on"}


def _env_bool(name: str, default: str) -> bool:
    return os.environ.get(name, default).strip().lower() in _TRUTHY


class Config:
    """Mutable configuration object. Thread-safe via a read/write lock."""

    _lock = threading.RLock()

    def __init__(self) -> None:
        self._log_level: str = os.environ.get("RELEASEINFO_LOG_LEVEL", "INFO").upper()
        self._classify: bool = _env_bool("RELEASEINFO_CLASSIFY", "1")
        self._max_batch: int = int(os.environ.get("RELEASEINFO_MAX_BATCH", "100"))
        self._port: int = int(os.environ.get("PORT", "8000"))

    # --- Getters ---

    @property
    def log_level(self) -> str:
        with self._lock:
            return self._log_level

    @property
    def classify(self) -> bool:
        with self._lock:
            return self._classify

    @property
    def max_batch(self) -> int:
        with self._lock:
            return self._max_batch

    @property
    def port(self) -> int:
        with self._lock:
            return self._port

    # --- Setters (for live update via API) ---

    def update(self, data: dict) -> None:
        """Apply every key in `data` or none of them; raises ValueError on bad input."""
        with self._lock:
            log_level = self._log_level
            classify = self._classify
            max_batch = self._max_batch

            if "log_level" in data:
                log_level = str(data["log_level"]).upper()
            if "classify" in data:
                value = data["classify"]
                if isinstance(value, str):
                    value = value.strip().lower() in _TRUTHY
                classify = bool(value)
            if "max_batch" in data:
                try:
                    max_batch = int(data["max_batch"])
                except (TypeError, ValueError):
                    raise ValueError(f"max_batch must be an integer, got {data['max_batch']!r}") from None
                if max_batch < 1:
                    raise ValueError(f"max_batch must be positive, got {max_batch}")

            self._log_level = log_level
            self._classify = classify
            self._max_batch = max_batch

    def to_dict(self) -> dict:
        with self._lock:
            return {
                "log_level": self._log_level,
                "classify": self._classify,
                "max_batch": self._max_batch,
            }


# Singleton used across all modules
cfg = Config()
