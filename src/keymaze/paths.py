from __future__ import annotations

import logging
import os
from pathlib import Path

from platformdirs import PlatformDirs

logger = logging.getLogger(__name__)

APP_NAME = "keymaze"

# Environment variable override (useful for tests and portable setups)
ENV_DATA_DIR = "KEYMAZE_DATA_DIR"


class AppPaths:
    """Resolve platform-appropriate directories for keymaze user data.

    Uses platformdirs; ``KEYMAZE_DATA_DIR`` overrides the data directory.
    """

    def __init__(self, app_name: str = APP_NAME) -> None:
        self._dirs = PlatformDirs(appname=app_name, appauthor=False)
        self._data_dir = self._compute_dir(ENV_DATA_DIR, Path(self._dirs.user_data_dir))

    @staticmethod
    def _compute_dir(env_var: str, default: Path) -> Path:
        override = os.getenv(env_var)
        if override:
            return Path(override).expanduser().resolve()
        return Path(default).expanduser().resolve()

    @property
    def data_dir(self) -> Path:
        return self._data_dir

    @property
    def records_path(self) -> Path:
        return self._data_dir / "best_time.json"

    def ensure_dirs(self) -> None:
        self._data_dir.mkdir(parents=True, exist_ok=True)
        logger.debug("Ensured data dir %s", self._data_dir)


__all__ = ["AppPaths", "APP_NAME", "ENV_DATA_DIR"]
