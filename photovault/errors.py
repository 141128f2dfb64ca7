"""Error kinds raised by the image lifecycle.

Every kind maps to its own HTTP status and ``error`` name so a client can
tell a bad request from missing data, a backend failure, or a move that
stopped halfway.
"""


class PhotoVaultError(Exception):
    """Base class for all errors surfaced to API callers."""

    status_code = 500

    def __init__(self, message, details=None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    @property
    def error(self):
        return type(self).__name__

    def to_dict(self):
        return {"error": self.error, "message": self.message, "details": self.details}


# Input errors: rejected before touching storage


class MissingOwner(PhotoVaultError):
    status_code = 400


class NoFilesProvided(PhotoVaultError):
    status_code = 400


class Unauthenticated(PhotoVaultError):
    status_code = 401


class NotFound(PhotoVaultError):
    """No row for this id + owner pair. Never says which half was wrong."""

    status_code = 404


# Storage errors


class StoreError(PhotoVaultError):
    status_code = 500


class StoreTimeout(StoreError):
    status_code = 504


class MoveError(PhotoVaultError):
    """A delete or recover stopped at ``step``.

    Step 2 failures leave the image where it was. Step 3 failures leave it
    in both tables.
    """

    status_code = 500
    step = None

    def __init__(self, message, image_id, details=None):
        details = dict(details or {})
        details.setdefault("image_id", image_id)
        details.setdefault("step", self.step)
        super().__init__(message, details)
        self.image_id = image_id


class ArchiveWriteFailed(MoveError):
    step = 2


class LiveRemovalFailed(MoveError):
    step = 3


class RecoverWriteFailed(MoveError):
    step = 2


class ArchiveRemovalFailed(MoveError):
    step = 3


class PartialIngestFailure(PhotoVaultError):
    """At least one file of an upload failed; others may be committed."""

    status_code = 500

    def __init__(self, message, committed_ids=(), details=None):
        details = dict(details or {})
        details["committed_ids"] = sorted(committed_ids)
        super().__init__(message, details)
        self.committed_ids = list(details["committed_ids"])
