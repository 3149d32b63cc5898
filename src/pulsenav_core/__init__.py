"""Motion control core for pulsenav."""

from pulsenav_core.adapters import Clock, EncoderBank, MotorDriver, PositionSensor, SystemClock
from pulsenav_core.config import MotionConfig, config_from_dict, load_config
from pulsenav_core.correction import CorrectionConfig, PoseCorrector, heading_error, nearest_cardinal
from pulsenav_core.data_model import (
    CalibrationConstants,
    Cardinal,
    CorrectionResult,
    CorrectionThresholds,
    MotionCommand,
    MotionResult,
    Pose,
    Side,
)
from pulsenav_core.drive import DriveConfig, DrivePrimitives
from pulsenav_core.errors import (
    CorrectionLimitError,
    MotionError,
    MotionTimeoutError,
    SensorUnavailableError,
)
from pulsenav_core.logging import MotionLogger
from pulsenav_core.runtime import MotionStep, RunnerConfig, StepOutcome, StepRunner, steps_from_list

__all__ = [
    "CalibrationConstants",
    "Cardinal",
    "Clock",
    "CorrectionConfig",
    "CorrectionLimitError",
    "CorrectionResult",
    "CorrectionThresholds",
    "DriveConfig",
    "DrivePrimitives",
    "EncoderBank",
    "MotionCommand",
    "MotionConfig",
    "MotionError",
    "MotionLogger",
    "MotionResult",
    "MotionStep",
    "MotionTimeoutError",
    "MotorDriver",
    "Pose",
    "PoseCorrector",
    "PositionSensor",
    "RunnerConfig",
    "SensorUnavailableError",
    "Side",
    "StepOutcome",
    "StepRunner",
    "SystemClock",
    "config_from_dict",
    "heading_error",
    "load_config",
    "nearest_cardinal",
    "steps_from_list",
]
