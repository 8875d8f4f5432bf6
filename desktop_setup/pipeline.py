from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Protocol, Sequence

from .config import SetupConfig
from .logging_utils import log_success

logger = logging.getLogger(__name__)


class Policy(str, Enum):
    FAIL_FAST = "fail_fast"
    BEST_EFFORT = "best_effort"


@dataclass
class RunContext:
    config: SetupConfig
    notices: List[str] = field(default_factory=list)

    @property
    def dry_run(self) -> bool:
        return self.config.dry_run

    @property
    def sudo(self) -> bool:
        return self.config.sudo

    def notify(self, message: str) -> None:
        if message not in self.notices:
            self.notices.append(message)


class Step(Protocol):
    """A single idempotent step."""

    step_id: str
    policy: Policy

    def is_satisfied(self, ctx: RunContext) -> bool:
        ...

    def apply(self, ctx: RunContext) -> None:
        ...


class StepFailed(RuntimeError):
    def __init__(self, index: int, step_id: str, cause: BaseException) -> None:
        super().__init__(f"Step {index} ({step_id}) failed: {cause}")
        self.index = index
        self.step_id = step_id
        self.cause = cause


@dataclass(frozen=True)
class PipelineResult:
    ran: List[str]
    skipped: List[str]
    best_effort_failures: List[str]


def run_pipeline(*, ctx: RunContext, steps: Sequence[Step]) -> PipelineResult:
    """Run steps in order.

    A failing fail_fast step raises StepFailed and nothing after it runs.
    A failing best_effort step is logged and the run moves on. Completed steps
    are never rolled back.
    """

    ran: List[str] = []
    skipped: List[str] = []
    failures: List[str] = []
    total = len(steps)

    for index, step in enumerate(steps, start=1):
        try:
            if step.is_satisfied(ctx):
                logger.info("Skipping step %d/%d %s (already satisfied)", index, total, step.step_id)
                skipped.append(step.step_id)
                continue

            logger.info("Running step %d/%d %s", index, total, step.step_id)
            step.apply(ctx)
        except Exception as e:
            if step.policy is Policy.BEST_EFFORT:
                logger.error("Step %d/%d %s failed, continuing: %s", index, total, step.step_id, e)
                failures.append(step.step_id)
                continue
            raise StepFailed(index, step.step_id, e) from e

        log_success(logger, "Step %d/%d %s completed", index, total, step.step_id)
        ran.append(step.step_id)

    return PipelineResult(ran=ran, skipped=skipped, best_effort_failures=failures)
