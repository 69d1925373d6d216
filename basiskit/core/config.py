from __future__ import annotations
import logging
from pathlib import Path
from typing import Any, Dict, Optional
import yaml
from blinker import Signal
from .modes import AngleMode, CoordinateMode

logger = logging.getLogger(__name__)


class Config:
    """User defaults applied to new sketches."""

    def __init__(self):
        self.coordinate_mode: CoordinateMode = CoordinateMode.RIGHT_HAND
        self.angle_mode: AngleMode = AngleMode.DEGREES
        self.highlight_color: str = "red"
        self.changed = Signal()

    def set_coordinate_mode(self, mode: CoordinateMode) -> None:
        if self.coordinate_mode is mode:
            return
        self.coordinate_mode = mode
        self.changed.send(self)

    def set_angle_mode(self, mode: AngleMode) -> None:
        if self.angle_mode is mode:
            return
        self.angle_mode = mode
        self.changed.send(self)

    def set_highlight_color(self, color: str) -> None:
        if self.highlight_color == color:
            return
        self.highlight_color = color
        self.changed.send(self)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "coordinate_mode": self.coordinate_mode.value,
            "angle_mode": self.angle_mode.value,
            "highlight_color": self.highlight_color,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Config:
        config = cls()
        mode = CoordinateMode.parse(data.get("coordinate_mode"))
        if mode is not None:
            config.coordinate_mode = mode
        angle_mode = AngleMode.parse(data.get("angle_mode"))
        if angle_mode is not None:
            config.angle_mode = angle_mode
        config.highlight_color = data.get(
            "highlight_color", config.highlight_color
        )
        return config


class ConfigManager:
    def __init__(self, filepath: Path):
        self.filepath = Path(filepath)
        self.config: Optional[Config] = None

        self.load_config()

    def save(self) -> None:
        assert self.config is not None
        self.filepath.parent.mkdir(parents=True, exist_ok=True)
        with open(self.filepath, "w") as f:
            yaml.safe_dump(self.config.to_dict(), f)
        logger.debug(f"Config saved to {self.filepath}")

    def load_config(self) -> Config:
        if not self.filepath.exists():
            self.config = Config()  # Use a default config
            return self.config

        with open(self.filepath, "r") as f:
            data = yaml.safe_load(f)
        if not data:
            self.config = Config()
            return self.config

        self.config = Config.from_dict(data)
        logger.debug(f"Config loaded from {self.filepath}")
        return self.config
