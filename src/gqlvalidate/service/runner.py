"""Validation runner: one engine call per query file, scanned for errors."""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable, Iterable
from concurrent.futures import ThreadPoolExecutor, as_completed

from gqlvalidate.engine.base import Engine, EngineError, EngineResult
from gqlvalidate.models.results import ValidationOutcome, ValidationSummary
from gqlvalidate.queries.source import QueryCase, QueryLoadError, load_case
from gqlvalidate.scanner import scan

logger = logging.getLogger("gqlvalidate.runner")

OutcomeCallback = Callable[[ValidationOutcome], None]


def _elapsed_ms(start: float) -> int:
    return int((time.perf_counter() - start) * 1000)


class ValidationRunner:
    """Validates query files against an :class:`Engine`.

    Each query is executed exactly once; there are no retries.  With
    ``workers > 1`` queries run on a thread pool and outcomes are put back in
    input order.  ``fail_fast`` stops the run after the first failure; on a
    thread pool that means no query *starts* once a failure has been seen,
    while queries already running are allowed to finish.
    """

    def __init__(
        self,
        engine: Engine,
        fail_fast: bool = False,
        workers: int = 1,
        on_outcome: OutcomeCallback | None = None,
    ) -> None:
        if workers < 1:
            raise ValueError(f"workers must be at least 1, got {workers}")
        self._engine = engine
        self._fail_fast = fail_fast
        self._workers = workers
        self._on_outcome = on_outcome

    # -- single query --------------------------------------------------------

    def validate_case(self, case: QueryCase) -> ValidationOutcome:
        """Load, execute and scan one query file."""
        start = time.perf_counter()
        try:
            query, variables = load_case(case)
        except QueryLoadError as exc:
            return ValidationOutcome(
                name=case.name,
                path=str(case.path),
                messages=(str(exc),),
                duration_ms=_elapsed_ms(start),
            )

        result: EngineResult | None = None
        top_level_error: str | None = None
        try:
            result = self._engine.execute(query, variables)
        except EngineError as exc:
            top_level_error = str(exc)
        duration_ms = _elapsed_ms(start)

        messages = scan(
            top_level_error,
            result.errors if result is not None else None,
            result.data if result is not None else None,
        )
        return ValidationOutcome(
            name=case.name,
            path=str(case.path),
            messages=tuple(messages),
            duration_ms=duration_ms,
        )

    # -- whole run -----------------------------------------------------------

    def run(self, cases: Iterable[QueryCase]) -> ValidationSummary:
        cases = list(cases)
        if self._workers == 1 or len(cases) <= 1:
            outcomes = self._run_sequential(cases)
        else:
            outcomes = self._run_parallel(cases)
        return ValidationSummary(outcomes=tuple(outcomes))

    def _emit(self, outcome: ValidationOutcome) -> None:
        logger.debug(
            "%s %s (%dms)", "PASS" if outcome.passed else "FAIL", outcome.name, outcome.duration_ms
        )
        if self._on_outcome is not None:
            self._on_outcome(outcome)

    def _run_sequential(self, cases: list[QueryCase]) -> list[ValidationOutcome]:
        outcomes: list[ValidationOutcome] = []
        for case in cases:
            outcome = self.validate_case(case)
            outcomes.append(outcome)
            self._emit(outcome)
            if self._fail_fast and not outcome.passed:
                logger.info("Stopping after first failure (%s)", outcome.name)
                break
        return outcomes

    def _run_parallel(self, cases: list[QueryCase]) -> list[ValidationOutcome]:
        failed = threading.Event()

        def task(case: QueryCase) -> ValidationOutcome | None:
            if self._fail_fast and failed.is_set():
                return None
            outcome = self.validate_case(case)
            if not outcome.passed:
                failed.set()
            return outcome

        collected: list[tuple[int, ValidationOutcome]] = []
        with ThreadPoolExecutor(
            max_workers=self._workers, thread_name_prefix="gql-validate"
        ) as pool:
            futures = {pool.submit(task, case): index for index, case in enumerate(cases)}
            for future in as_completed(futures):
                outcome = future.result()
                if outcome is None:
                    continue
                collected.append((futures[future], outcome))
                self._emit(outcome)

        if self._fail_fast and failed.is_set():
            logger.info("Stopped scheduling after first failure")
        collected.sort(key=lambda item: item[0])
        return [outcome for _, outcome in collected]
