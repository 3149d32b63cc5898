import json
from pathlib import Path

import pytest

from pulsenav_core import MotionConfig, config_from_dict, load_config

ROOT = Path(__file__).resolve().parents[1]


def test_missing_file_falls_back_to_defaults(tmp_path) -> None:
    config = load_config(tmp_path / "absent.yaml")

    assert config == MotionConfig()
    assert config.drive.timeout_s == 10.0
    assert config.correction.restore_heading is False


def test_yaml_overrides_sections(tmp_path) -> None:
    path = tmp_path / "robot.yaml"
    path.write_text(
        "\n".join(
            [
                "calibration:",
                "  robot_width_in: 8.25",
                "  backward_calibrator: 4",
                "thresholds:",
                "  heading_tolerance_deg: 0.5",
                "drive:",
                "  timeout_s: null",
                "correction:",
                "  restore_heading: true",
            ]
        ),
        encoding="utf-8",
    )

    config = load_config(path)

    assert config.calibration.robot_width_in == 8.25
    assert config.calibration.backward_calibrator == 4
    assert config.calibration.wheel_radius_in == 1.25
    assert config.thresholds.heading_tolerance_deg == 0.5
    assert config.drive.timeout_s is None
    assert config.correction.restore_heading is True


def test_json_config(tmp_path) -> None:
    path = tmp_path / "robot.json"
    path.write_text(json.dumps({"runner": {"continue_on_error": True}}), encoding="utf-8")

    config = load_config(path)

    assert config.runner.continue_on_error is True


def test_unknown_keys_are_rejected() -> None:
    with pytest.raises(ValueError, match="wheel_diameter"):
        config_from_dict({"calibration": {"wheel_diameter": 2.5}})


def test_unsupported_extension(tmp_path) -> None:
    path = tmp_path / "robot.toml"
    path.write_text("[drive]\n", encoding="utf-8")

    with pytest.raises(ValueError):
        load_config(path)


def test_shipped_demo_config_loads() -> None:
    from pulsenav_core.config import read_config_file

    data = read_config_file(ROOT / "config" / "sim" / "pulse_demo.yaml")
    config = config_from_dict(data["motion"])

    assert config.calibration.counts_per_inch == pytest.approx(40.49, abs=0.01)
    assert config.thresholds.pulse_percent == 15.0
    assert len(data["steps"]) == 7
