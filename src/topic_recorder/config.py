"""Recorder configuration dataclass."""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import yaml

from topic_recorder.formatting import DEFAULT_SIGNIFICANT_DIGITS
from topic_recorder.writer import IOErrorPolicy


@dataclass
class RecorderConfig:
    """Configuration for a record file."""

    path: str = "logs/telemetry.csv"  # ".gz" is appended when compressed
    compressed: bool = False
    encoding: str = "utf-8"
    on_io_error: IOErrorPolicy = IOErrorPolicy.LOG
    significant_digits: int = DEFAULT_SIGNIFICANT_DIGITS

    @classmethod
    def from_yaml(cls, yaml_path: Path) -> "RecorderConfig":
        """Load config from the ``recorder`` section of a YAML file."""
        with open(yaml_path) as f:
            data = yaml.safe_load(f) or {}

        rec = data.get("recorder", {})

        return cls(
            path=str(rec.get("path", "logs/telemetry.csv")),
            compressed=bool(rec.get("compressed", False)),
            encoding=rec.get("encoding", "utf-8"),
            on_io_error=IOErrorPolicy(rec.get("on_io_error", "log")),
            significant_digits=int(rec.get("significant_digits", DEFAULT_SIGNIFICANT_DIGITS)),
        )

    @classmethod
    def defaults(cls) -> "RecorderConfig":
        """Create with default values."""
        return cls()


# Default config path
DEFAULT_RECORDER_YAML = Path(__file__).parent.parent.parent / "config" / "recorder.yaml"


def load_recorder_config(yaml_path: Optional[Path] = None) -> RecorderConfig:
    """Load recorder config from YAML, falling back to defaults."""
    path = Path(yaml_path or DEFAULT_RECORDER_YAML)
    if path.exists():
        return RecorderConfig.from_yaml(path)
    return RecorderConfig.defaults()
