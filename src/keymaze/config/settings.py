from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass
from importlib import resources
from pathlib import Path
from typing import Any, Optional

import yaml

from ..exceptions import SettingsError

logger = logging.getLogger(__name__)


@dataclass
class Settings:
    """Game settings.

    - default_width/default_height: size used when the player gives none or
      an unsupported one.
    - min_size/max_size: inclusive range a session's width and height must
      fall in.
    - cell_width: padding of each cell in the text grid.
    - max_generation_attempts: cap on the generate/verify loop.
    - require_winnable: additionally reject layouts where the key sits behind
      its own door.
    - seed: optional fixed seed for reproducible mazes.
    """

    default_width: int = 10
    default_height: int = 10
    min_size: int = 5
    max_size: int = 10
    cell_width: int = 3
    max_generation_attempts: int = 1000
    require_winnable: bool = False
    seed: Optional[int] = None

    def __post_init__(self) -> None:
        if self.min_size < 1 or self.max_size < self.min_size:
            raise SettingsError(f"Invalid size range {self.min_size}..{self.max_size}")
        for name in ("default_width", "default_height"):
            value = getattr(self, name)
            if not self.supports(value):
                raise SettingsError(f"{name}={value} outside supported range {self.min_size}..{self.max_size}")
        if self.cell_width < 1:
            raise SettingsError("cell_width must be positive")
        if self.max_generation_attempts < 1:
            raise SettingsError("max_generation_attempts must be positive")

    def supports(self, value: int) -> bool:
        return self.min_size <= value <= self.max_size

    def clamp_dimension(self, value: Optional[int], default: int) -> int:
        """Return ``value`` when it is a supported size, otherwise ``default``."""
        if value is None or not self.supports(value):
            return default
        return value

    # ---- Loading / saving ------------------------------------------------
    @staticmethod
    def _load_yaml(path: Path) -> dict:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise SettingsError(f"Settings file {path} must contain a mapping")
        return data

    @classmethod
    def _deep_merge(cls, base: dict, overlay: dict) -> dict:
        merged = dict(base)
        for k, v in (overlay or {}).items():
            if isinstance(v, dict) and isinstance(base.get(k), dict):
                merged[k] = cls._deep_merge(base[k], v)
            else:
                merged[k] = v
        return merged

    @classmethod
    def _from_dict(cls, data: dict) -> "Settings":
        known = {f.name for f in dataclasses.fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise SettingsError(f"Unknown settings keys: {', '.join(unknown)}")
        try:
            return cls(**data)
        except TypeError as exc:
            raise SettingsError(str(exc)) from exc

    @classmethod
    def load(cls, user_path: Optional[Path] = None) -> "Settings":
        """Load settings from built-in defaults and optional user override file.

        If user_path is provided and exists, overlay values onto defaults.
        """
        try:
            with resources.files("keymaze.config").joinpath("default_settings.yaml").open("r", encoding="utf-8") as f:
                default_data = yaml.safe_load(f) or {}
        except FileNotFoundError:
            logger.warning("Default settings not found; falling back to dataclass defaults.")
            default_data = dataclasses.asdict(Settings())

        user_data: dict[str, Any] = {}
        if user_path is not None:
            if user_path.exists():
                try:
                    user_data = cls._load_yaml(user_path)
                except yaml.YAMLError as exc:
                    raise SettingsError(f"Could not parse settings file {user_path}: {exc}") from exc
                logger.info("Loaded user settings from %s", user_path)
            else:
                logger.warning("User settings file not found: %s", user_path)

        merged = cls._deep_merge(default_data, user_data)
        settings = cls._from_dict(merged)
        logger.debug("Settings merged: %s", settings)
        return settings

    def save(self, path: Path) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as f:
            yaml.safe_dump(dataclasses.asdict(self), f, sort_keys=False)
        logger.info("Saved settings to %s", path)


__all__ = ["Settings"]
