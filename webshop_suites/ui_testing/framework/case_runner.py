"""
================================================================================
UI Case Runner
================================================================================

Executes declarative UI cases and aggregates pass/fail results.

Each case gets its own browser session and fresh page objects. Inside a
case, steps run strictly in order (navigate, act, then assert); the first
failing step aborts the rest of that case only. Across cases there is no
shared state, so run_all() may schedule them concurrently.

Usage:
    runner = CaseRunner(
        session_factory=lambda: manager.session(settings.base_url, settings.timeouts),
        pages=PAGES,
        timeouts=settings.timeouts,
    )
    results = await runner.run_all(cases, workers=4)

================================================================================
"""

from __future__ import annotations

import asyncio
import time
from contextlib import contextmanager
from dataclasses import dataclass
from typing import AsyncContextManager, Callable, Dict, Iterator, List, Mapping, Optional, Sequence

import allure
from loguru import logger

from .case_loader import UICase
from .expectations import verify
from .page_base import BasePage
from .session import BrowserSession
from .settings import Timeouts


SessionFactory = Callable[[], AsyncContextManager[BrowserSession]]


# ================================================================================
# Results and Events
# ================================================================================

@dataclass
class CaseResult:
    """Outcome of one case."""
    name: str
    passed: bool
    duration_s: float = 0.0
    error_kind: str = ""
    selector: str = ""
    message: str = ""

    def summary(self) -> str:
        status = "PASS" if self.passed else "FAIL"
        line = f"[{status}] {self.name} ({self.duration_s:.2f}s)"
        if not self.passed:
            line += f" {self.error_kind}"
            if self.selector:
                line += f" @ {self.selector}"
            line += f": {self.message}"
        return line


@dataclass(frozen=True)
class StepEvent:
    """Structured step-start / step-end / step-failed event."""
    case: str
    step: str
    phase: str
    detail: str = ""


def log_event(event: StepEvent) -> None:
    """Default event hook: narrate steps through loguru."""
    if event.phase == "failed":
        logger.error(f"[{event.case}] {event.step} failed: {event.detail}")
    elif event.phase == "start":
        logger.info(f"[{event.case}] -> {event.step}")
    else:
        logger.debug(f"[{event.case}] <- {event.step}")


def result_from_error(name: str, error: BaseException, duration_s: float) -> CaseResult:
    """Build a failed CaseResult carrying the error's kind and selector."""
    return CaseResult(
        name=name,
        passed=False,
        duration_s=duration_s,
        error_kind=getattr(error, "kind", type(error).__name__),
        selector=getattr(error, "selector", ""),
        message=str(error),
    )


# ================================================================================
# Runner
# ================================================================================

class CaseRunner:
    """
    Runs UI cases against sessions produced by a factory.

    Args:
        session_factory: Returns an async context manager yielding a fresh session.
            Needed by run_case / run_all only; execute() takes the session directly.
        pages: Page name -> page object class
        timeouts: Assertion timeout and poll interval source
        on_event: Step event hook (defaults to loguru narration)
    """

    def __init__(
        self,
        session_factory: Optional[SessionFactory] = None,
        pages: Optional[Mapping[str, type]] = None,
        timeouts: Timeouts = Timeouts(),
        on_event: Optional[Callable[[StepEvent], None]] = None,
    ):
        self.session_factory = session_factory
        self.pages = dict(pages or {})
        self.timeouts = timeouts
        self.on_event = on_event or log_event

    @contextmanager
    def _step(self, case: UICase, step: str) -> Iterator[None]:
        self.on_event(StepEvent(case.name, step, "start"))
        with allure.step(step):
            try:
                yield
            except Exception as e:
                self.on_event(StepEvent(case.name, step, "failed", str(e)))
                raise
        self.on_event(StepEvent(case.name, step, "end"))

    async def execute(self, case: UICase, session: BrowserSession) -> None:
        """
        Run one case on an existing session. Raises on the first failure.

        Page objects are created on first use within the case and never
        shared with other cases.
        """
        pages: Dict[str, BasePage] = {}

        def page_for(name: str) -> BasePage:
            name = name or case.page
            if name not in pages:
                pages[name] = self.pages[name](session)
            return pages[name]

        for index, step in enumerate(case.steps, start=1):
            with self._step(case, f"Step {index}: {step.describe()}"):
                await page_for(step.page).perform(step.action, step.params)

        for expectation in case.expectations:
            with self._step(case, f"Expect {expectation.describe()}"):
                await verify(
                    page_for(expectation.page),
                    expectation,
                    timeout_ms=self.timeouts.assertion_ms,
                    interval_ms=self.timeouts.poll_interval_ms,
                )

    async def run_case(self, case: UICase) -> CaseResult:
        """
        Run one case on a fresh session; never raises for case failures.
        """
        if self.session_factory is None:
            raise RuntimeError("run_case needs a session_factory; use execute() with an open session")
        start = time.monotonic()
        try:
            async with self.session_factory() as session:
                try:
                    await self.execute(case, session)
                except Exception:
                    await self._capture_failure(case, session)
                    raise
        except Exception as e:
            result = result_from_error(case.name, e, time.monotonic() - start)
        else:
            result = CaseResult(case.name, True, time.monotonic() - start)

        (logger.info if result.passed else logger.error)(result.summary())
        return result

    async def run_all(self, cases: Sequence[UICase], workers: int = 1) -> List[CaseResult]:
        """
        Run cases with at most `workers` in flight. Results keep input order.
        """
        semaphore = asyncio.Semaphore(max(1, workers))

        async def bounded(case: UICase) -> CaseResult:
            async with semaphore:
                return await self.run_case(case)

        logger.info(f"Running {len(cases)} UI cases with {workers} worker(s)")
        results = await asyncio.gather(*(bounded(case) for case in cases))

        failed = sum(1 for r in results if not r.passed)
        logger.info(f"UI cases finished: {len(results) - failed} passed, {failed} failed")
        return list(results)

    async def _capture_failure(self, case: UICase, session: BrowserSession) -> None:
        try:
            png = await session.screenshot()
        except Exception as e:
            logger.warning(f"Failed to capture screenshot for {case.name}: {e}")
            return
        allure.attach(
            png,
            name=f"failure_{case.name}",
            attachment_type=allure.attachment_type.PNG,
        )
        allure.attach(
            session.url,
            name="Current URL",
            attachment_type=allure.attachment_type.TEXT,
        )


__all__ = [
    "CaseResult",
    "CaseRunner",
    "StepEvent",
    "log_event",
    "result_from_error",
]
