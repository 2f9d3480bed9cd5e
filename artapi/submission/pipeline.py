import time
from collections.abc import Callable
from concurrent.futures import FIRST_EXCEPTION, Future, ThreadPoolExecutor, wait
from datetime import datetime, timezone
from typing import TypeVar

from artapi.analysis.base import BaseAnalyzer
from artapi.analysis.exceptions import AnalysisError, AnalysisResponseError
from artapi.analysis.factory import AnalyzerFactory
from artapi.analysis.models import AnalysisResult
from artapi.concurrency.cancel_scope import CancelScope, OperationCancelledError
from artapi.config.settings import Settings
from artapi.logging.logger import Log
from artapi.storage.base import BaseStorageProvider
from artapi.storage.exceptions import StorageError
from artapi.storage.factory import StorageFactory
from artapi.storage.models import ArtPiece, ArtworkMetadata
from artapi.submission.exceptions import (
    AnalysisFailedError,
    AnalysisResponseMalformedError,
    MetadataWriteFailedError,
    StorageWriteFailedError,
    SubmissionCancelledError,
    SubmissionError,
    SubmissionTimeoutError,
)
from artapi.submission.models import SubmissionResult

T = TypeVar("T")


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class SubmissionPipeline:
    """Stores an image and analyzes it concurrently, then records the merged metadata.

    Pipeline: {save, analyze} in parallel -> join -> set_metadata.
    The first branch to fail aborts the submission and cancels the other
    branch's scope; metadata is written only when both branches succeed.
    Every submission gets its own two branch threads, so submissions never
    queue behind each other.
    """

    JOIN_POLL_INTERVAL_SECONDS = 0.1

    def __init__(
        self,
        *,
        storage: BaseStorageProvider,
        analyzer: BaseAnalyzer,
        timeout_seconds: float | None = None,
        now: Callable[[], datetime] = _utc_now,
    ) -> None:
        self._storage = storage
        self._analyzer = analyzer
        self._timeout_seconds = timeout_seconds
        self._now = now

    def submit(self, image_bytes: bytes, scope: CancelScope | None = None) -> SubmissionResult:
        """Run the submission pipeline for one image.

        Args:
            image_bytes: Raw image, already size-checked by the caller.
            scope: Request scope; cancelling it stops the branches that have
                not started their remote call yet.

        Raises:
            SubmissionError: one of its subclasses, naming the failed phase.
        """
        request_scope = scope or CancelScope()
        join_scope = request_scope.child()
        failures: list[SubmissionError] = []

        executor = ThreadPoolExecutor(max_workers=2, thread_name_prefix="submission")
        try:
            save_future = executor.submit(
                self._run_branch, self._save, image_bytes, join_scope, failures
            )
            analysis_future = executor.submit(
                self._run_branch, self._analyze, image_bytes, join_scope, failures
            )
            self._join([save_future, analysis_future], join_scope, failures)
        finally:
            join_scope.cancel()
            # a failed submission does not wait for its slower branch
            executor.shutdown(wait=False, cancel_futures=True)

        object_id: str = save_future.result()
        analysis: AnalysisResult = analysis_future.result()

        # Detached from both scopes: a successful pair of branches is always recorded.
        metadata = ArtworkMetadata.from_analysis(analysis, uploaded_at=self._now())
        try:
            self._storage.set_metadata(object_id, metadata)
        except StorageError as exc:
            raise MetadataWriteFailedError(
                f"Failed to set metadata on {object_id}: {exc}"
            ) from exc

        Log.info(f"Submission {object_id} processed: '{analysis.title}'")
        return SubmissionResult(id=object_id, title=analysis.title, tags=list(analysis.tags))

    def list_favorites(self) -> list[ArtPiece]:
        return self._storage.list_favorites()

    def close(self) -> None:
        self._storage.close()

    def _join(
        self,
        futures: list[Future],
        join_scope: CancelScope,
        failures: list[SubmissionError],
    ) -> None:
        deadline = (
            time.monotonic() + self._timeout_seconds
            if self._timeout_seconds is not None
            else None
        )
        pending = set(futures)
        while pending:
            if join_scope.cancelled:
                raise SubmissionCancelledError("Submission cancelled before both branches finished")
            poll = self.JOIN_POLL_INTERVAL_SECONDS
            if deadline is not None:
                remaining = deadline - time.monotonic()
                if remaining <= 0:
                    raise SubmissionTimeoutError(
                        f"Storage and analysis did not finish within {self._timeout_seconds}s"
                    )
                poll = min(poll, remaining)
            _, pending = wait(pending, timeout=poll, return_when=FIRST_EXCEPTION)
            if failures:
                # failures are recorded in the order the branches failed
                error = failures[0]
                Log.warning(f"Submission branch failed: {error}")
                raise error

    @staticmethod
    def _run_branch(
        branch: Callable[[bytes, CancelScope], T],
        image_bytes: bytes,
        scope: CancelScope,
        failures: list[SubmissionError],
    ) -> T:
        try:
            return branch(image_bytes, scope)
        except SubmissionError as exc:
            failures.append(exc)
            raise

    def _save(self, image_bytes: bytes, scope: CancelScope) -> str:
        try:
            object_id = self._storage.save(image_bytes, scope=scope)
        except OperationCancelledError as exc:
            raise SubmissionCancelledError("Storage write cancelled") from exc
        except StorageError as exc:
            raise StorageWriteFailedError(f"Failed to store image: {exc}") from exc
        except Exception as exc:
            raise StorageWriteFailedError(
                f"Unexpected storage failure: {type(exc).__name__}: {exc}"
            ) from exc
        Log.debug(f"Storage branch finished: {object_id}")
        return object_id

    def _analyze(self, image_bytes: bytes, scope: CancelScope) -> AnalysisResult:
        try:
            result = self._analyzer.analyze_image(image_bytes, scope=scope)
        except OperationCancelledError as exc:
            raise SubmissionCancelledError("Analysis cancelled") from exc
        except AnalysisResponseError as exc:
            raise AnalysisResponseMalformedError(f"Malformed analysis reply: {exc}") from exc
        except AnalysisError as exc:
            raise AnalysisFailedError(f"Image analysis failed: {exc}") from exc
        except Exception as exc:
            raise AnalysisFailedError(
                f"Unexpected analysis failure: {type(exc).__name__}: {exc}"
            ) from exc
        Log.debug(f"Analysis branch finished: '{result.title}'")
        return result


def build_pipeline(settings: Settings) -> SubmissionPipeline:
    """Build a SubmissionPipeline with the configured adapters."""
    return SubmissionPipeline(
        storage=StorageFactory.create(settings),
        analyzer=AnalyzerFactory.create(settings),
        timeout_seconds=settings.submission_timeout_seconds,
    )
