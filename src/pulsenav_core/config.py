"""Loading of calibration and tuning constants from JSON or YAML."""

from __future__ import annotations

import json
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Dict, Mapping

from pulsenav_core.correction import CorrectionConfig
from pulsenav_core.data_model import CalibrationConstants, CorrectionThresholds
from pulsenav_core.drive import DriveConfig
from pulsenav_core.runtime import RunnerConfig


@dataclass
class MotionConfig:
    calibration: CalibrationConstants = field(default_factory=CalibrationConstants)
    thresholds: CorrectionThresholds = field(default_factory=CorrectionThresholds)
    drive: DriveConfig = field(default_factory=DriveConfig)
    correction: CorrectionConfig = field(default_factory=CorrectionConfig)
    runner: RunnerConfig = field(default_factory=RunnerConfig)


def read_config_file(path: Path) -> Dict[str, Any]:
    if not path.exists():
        return {}

    if path.suffix.lower() == ".json":
        data = json.loads(path.read_text(encoding="utf-8"))
    elif path.suffix.lower() in {".yaml", ".yml"}:
        try:
            import yaml
        except ImportError as exc:
            raise RuntimeError(
                "YAML config requires PyYAML. Install it or use a JSON config instead."
            ) from exc
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    else:
        raise ValueError("Unsupported config format. Use JSON or YAML.")

    return dict(data or {})


def load_config(path: Path) -> MotionConfig:
    return config_from_dict(read_config_file(path))


def config_from_dict(data: Mapping[str, Any]) -> MotionConfig:
    base = MotionConfig()
    return MotionConfig(
        calibration=_override(base.calibration, data.get("calibration")),
        thresholds=_override(base.thresholds, data.get("thresholds")),
        drive=_override(base.drive, data.get("drive")),
        correction=_override(base.correction, data.get("correction")),
        runner=_override(base.runner, data.get("runner")),
    )


def _override(section: Any, values: Any) -> Any:
    if not values:
        return section
    known = {item.name for item in fields(section)}
    unknown = sorted(set(values) - known)
    if unknown:
        raise ValueError(
            f"Unknown {type(section).__name__} keys: {', '.join(unknown)}"
        )
    return replace(section, **values)
