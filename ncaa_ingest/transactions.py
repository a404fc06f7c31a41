"""Transaction management over SQLAlchemy sessions.

Every unit of work gets its own session from the configured factory. The
manager keeps a registry of open contexts keyed by sequence number so that
shutdown and test teardown can roll back anything left open.
"""

from __future__ import annotations

import itertools
import logging
import threading
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Optional, Sequence

from sqlalchemy.orm import Session

from ncaa_ingest.errors import TransactionError

logger = logging.getLogger(__name__)

Operation = Callable[[Session, int], Any]

ALREADY_FINALIZED = "Transaction already committed or rolled back"


def _operation_name(operation: Any) -> str:
    return getattr(operation, "__name__", None) or type(operation).__name__


@dataclass(frozen=True)
class TransactionStep:
    """A step with an optional compensating action for side effects the database can't undo."""

    execute: Operation
    rollback: Optional[Operation] = None
    name: str = "step"


class TransactionContext:
    def __init__(
        self,
        session: Session,
        sequence: int,
        cleanup: Callable[[int], None],
    ) -> None:
        self.session = session
        self.sequence = sequence
        self._cleanup = cleanup
        self.committed = False
        self.rolled_back = False

    def is_active(self) -> bool:
        return not self.committed and not self.rolled_back

    def commit(self) -> None:
        if not self.is_active():
            raise TransactionError(ALREADY_FINALIZED)
        try:
            self.session.commit()
        except Exception as exc:
            raise TransactionError(
                f"Failed to commit transaction {self.sequence}: {exc}"
            ) from exc
        self.committed = True
        self._finalize()
        logger.debug("Transaction committed sequence=%s", self.sequence)

    def rollback(self) -> None:
        if not self.is_active():
            raise TransactionError(ALREADY_FINALIZED)
        try:
            self.session.rollback()
        except Exception as exc:
            # stays registered for reporting, but gives its connection back
            self._release_session()
            raise TransactionError(
                f"Failed to roll back transaction {self.sequence}: {exc}"
            ) from exc
        self.rolled_back = True
        self._finalize()
        logger.debug("Transaction rolled back sequence=%s", self.sequence)

    def _release_session(self) -> None:
        try:
            self.session.close()
        except Exception:
            logger.exception("Failed to close session sequence=%s", self.sequence)

    def _finalize(self) -> None:
        try:
            self.session.close()
        finally:
            self._cleanup(self.sequence)


class TransactionManager:
    def __init__(self, session_factory: Callable[[], Session]) -> None:
        self._session_factory = session_factory
        self._active: dict[int, TransactionContext] = {}
        self._sequence = itertools.count(1)
        self._lock = threading.Lock()

    def create_transaction_context(self) -> TransactionContext:
        """Begin a transaction the caller commits or rolls back explicitly."""

        session = None
        try:
            session = self._session_factory()
            session.begin()
        except Exception as exc:
            if session is not None:
                session.close()
            raise TransactionError(f"Failed to begin transaction: {exc}") from exc

        with self._lock:
            sequence = next(self._sequence)
            context = TransactionContext(session, sequence, self._deregister)
            self._active[sequence] = context
        logger.debug("Transaction started sequence=%s", sequence)
        return context

    def execute_in_transaction(self, operation: Operation) -> Any:
        """Run ``operation(session, sequence)``; commit on return, roll back and re-raise on error."""

        context = self.create_transaction_context()
        try:
            result = operation(context.session, context.sequence)
            context.commit()
        except Exception as exc:
            self._rollback_after_error(context, exc, _operation_name(operation))
            raise
        return result

    def execute_multiple_in_transaction(self, operations: Sequence[Operation]) -> list[Any]:
        def run_all(session: Session, sequence: int) -> list[Any]:
            results = []
            for index, operation in enumerate(operations):
                logger.debug(
                    "Executing operation sequence=%s index=%s name=%s",
                    sequence,
                    index,
                    _operation_name(operation),
                )
                results.append(operation(session, sequence))
            return results

        return self.execute_in_transaction(run_all)

    def execute_with_rollback_on_failure(self, steps: Sequence[TransactionStep]) -> list[Any]:
        """Run steps in order; on failure compensate executed steps newest-first, then roll back."""

        def run_steps(session: Session, sequence: int) -> list[Any]:
            results = []
            executed: list[TransactionStep] = []
            try:
                for index, step in enumerate(steps):
                    logger.debug(
                        "Executing step sequence=%s index=%s name=%s",
                        sequence,
                        index,
                        getattr(step, "name", _operation_name(step.execute)),
                    )
                    results.append(step.execute(session, sequence))
                    executed.append(step)
            except Exception as exc:
                self._compensate(reversed(executed), session, sequence, exc)
                raise
            return results

        return self.execute_in_transaction(run_steps)

    def has_active_transactions(self) -> bool:
        return bool(self._active)

    def get_active_transaction_count(self) -> int:
        return len(self._active)

    def force_rollback_all(self) -> int:
        with self._lock:
            contexts = list(self._active.values())
        if not contexts:
            return 0

        logger.warning("Force rolling back %d active transaction(s)", len(contexts))
        rolled_back = 0
        for context in contexts:
            if not context.is_active():
                continue
            try:
                context.rollback()
                rolled_back += 1
            except TransactionError:
                logger.exception(
                    "Failed to force rollback transaction sequence=%s",
                    context.sequence,
                )
        return rolled_back

    def _deregister(self, sequence: int) -> None:
        with self._lock:
            self._active.pop(sequence, None)

    def _rollback_after_error(
        self,
        context: TransactionContext,
        error: Exception,
        operation_name: str,
    ) -> None:
        if not context.is_active():
            return
        try:
            context.rollback()
        except TransactionError:
            logger.exception(
                "Rollback failed sequence=%s operation=%s original_error=%s",
                context.sequence,
                operation_name,
                error,
            )
            return
        logger.warning(
            "Transaction rolled back sequence=%s operation=%s error=%s",
            context.sequence,
            operation_name,
            error,
        )

    def _compensate(
        self,
        steps: Iterable[TransactionStep],
        session: Session,
        sequence: int,
        error: Exception,
    ) -> None:
        logger.warning(
            "Running compensating rollbacks sequence=%s error=%s",
            sequence,
            error,
        )
        for step in steps:
            undo = getattr(step, "rollback", None)
            if undo is None:
                continue
            try:
                undo(session, sequence)
            except Exception:
                logger.exception(
                    "Compensating rollback failed sequence=%s step=%s",
                    sequence,
                    getattr(step, "name", "step"),
                )
