"""Sequential execution of motion steps."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Union

from pulsenav_core.correction import PoseCorrector
from pulsenav_core.data_model import CorrectionResult, MotionResult
from pulsenav_core.drive import DrivePrimitives
from pulsenav_core.errors import MotionError
from pulsenav_core.logging import MotionLogger

StepResult = Union[MotionResult, CorrectionResult, None]


@dataclass
class RunnerConfig:
    continue_on_error: bool = False


@dataclass(frozen=True)
class MotionStep:
    op: str
    args: Mapping[str, float] = field(default_factory=dict)


@dataclass
class StepOutcome:
    step: MotionStep
    result: StepResult = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class StepRunner:
    """Runs steps one at a time; each blocks until its maneuver ends."""

    def __init__(
        self,
        drive: DrivePrimitives,
        corrector: PoseCorrector,
        logger: Optional[MotionLogger] = None,
        config: Optional[RunnerConfig] = None,
    ) -> None:
        self._drive = drive
        self._corrector = corrector
        self._logger = logger
        self._config = config or RunnerConfig()
        self._ops: Dict[str, Callable[..., StepResult]] = {
            "move_forward": drive.move_forward,
            "move_forward_seconds": drive.move_forward_seconds,
            "turn_left": drive.turn_left,
            "turn_right": drive.turn_right,
            "correct_heading": corrector.correct_heading,
            "check_x": corrector.check_x,
            "check_y": corrector.check_y,
            "wait": self._wait,
        }

    @property
    def ops(self) -> List[str]:
        return sorted(self._ops)

    def run_step(self, step: MotionStep) -> StepOutcome:
        handler = self._ops.get(step.op)
        if handler is None:
            raise ValueError(f"Unknown motion step {step.op!r}.")
        try:
            result = handler(**dict(step.args))
        except MotionError as exc:
            outcome = StepOutcome(step=step, error=str(exc))
            if self._logger:
                self._logger.log_event(
                    "step_failed",
                    self._drive.clock.now(),
                    {"op": step.op, "args": dict(step.args), "error": str(exc)},
                )
            return outcome
        return StepOutcome(step=step, result=result)

    def run(self, steps: Iterable[MotionStep]) -> List[StepOutcome]:
        outcomes: List[StepOutcome] = []
        for step in steps:
            outcome = self.run_step(step)
            outcomes.append(outcome)
            if not outcome.ok and not self._config.continue_on_error:
                break
        return outcomes

    def _wait(self, seconds: float) -> None:
        self._drive.clock.sleep(seconds)


def steps_from_list(data: Iterable[Mapping[str, Any]]) -> List[MotionStep]:
    steps: List[MotionStep] = []
    for item in data:
        if "op" not in item:
            raise ValueError(f"Motion step without 'op': {dict(item)!r}")
        args = {key: float(value) for key, value in item.items() if key != "op"}
        steps.append(MotionStep(op=str(item["op"]), args=args))
    return steps
