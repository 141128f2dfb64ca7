"""Concurrent multi-file upload.

Each file becomes its own live row, committed independently. Inserts run on
a shared, bounded thread pool and are joined before the response is built.
The first failed insert fails the whole upload, but inserts that already
committed stay committed: a failure means "some images may exist".
"""
import logging
from concurrent.futures import ThreadPoolExecutor, as_completed, wait
from concurrent.futures import TimeoutError as FuturesTimeout
from dataclasses import dataclass

from flask import current_app

from photovault.errors import NoFilesProvided, PartialIngestFailure, StoreError, StoreTimeout

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Upload:
    name: str
    data: bytes


class IngestionCoordinator:
    def __init__(self, store, max_workers=4, timeout=30.0):
        self.store = store
        self.timeout = timeout
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="photovault-ingest"
        )

    def ingest(self, owner, files):
        """Persist every file for ``owner``.

        Returns the stored records in the order their inserts resolved.

        Raises:
            NoFilesProvided: ``files`` is empty.
            PartialIngestFailure: an insert failed; ``committed_ids`` lists
                the rows that were written anyway.
            StoreTimeout: the inserts did not all finish in time.
        """
        if not files:
            raise NoFilesProvided("No files were uploaded.")

        app = current_app._get_current_object()
        futures = [
            self._executor.submit(self._persist, app, owner, upload) for upload in files
        ]

        stored = []
        try:
            for future in as_completed(futures, timeout=self.timeout):
                stored.append(future.result())
        except FuturesTimeout as exc:
            for future in futures:
                future.cancel()
            logger.error(
                "Upload for %s timed out after %.1fs (%d of %d files stored)",
                owner, self.timeout, len(stored), len(files),
            )
            raise StoreTimeout("Timed out storing uploaded images.") from exc
        except Exception as exc:
            committed = self._drain(futures)
            logger.error(
                "Upload for %s failed; %d of %d files were stored anyway: %s",
                owner, len(committed), len(files), committed,
                exc_info=not isinstance(exc, StoreError),
            )
            raise PartialIngestFailure(
                "Failed to store all uploaded images.", committed_ids=committed
            ) from exc

        logger.info("Stored %d images for %s", len(stored), owner)
        return stored

    def _persist(self, app, owner, upload):
        # Own app context, so own scoped session and pooled connection
        with app.app_context():
            return self.store.add_image(owner, upload.name, upload.data)

    def _drain(self, futures):
        """Cancel inserts not yet started, let running ones finish, return committed ids."""
        for future in futures:
            future.cancel()
        done, _ = wait(futures, timeout=self.timeout)
        return [
            future.result().id
            for future in done
            if not future.cancelled() and future.exception() is None
        ]

    def shutdown(self, block=True):
        self._executor.shutdown(wait=block, cancel_futures=True)
