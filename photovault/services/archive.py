"""Delete (live -> archived) and recover (archived -> live).

A move is three dependent steps: fetch the source row, insert it at the
destination, remove it from the source. Each step commits on its own. When
step 2 fails the image has not moved. When step 3 fails the image is in both
tables; nothing compensates for that; the row shows up in
``ImageStore.find_duplicates`` for manual cleanup.
"""
import logging

from photovault.errors import (
    ArchiveRemovalFailed,
    ArchiveWriteFailed,
    LiveRemovalFailed,
    RecoverWriteFailed,
    StoreError,
)
from photovault.models.image import utcnow

logger = logging.getLogger(__name__)

LIVE = "live"
ARCHIVED = "archived"
DUPLICATED = "duplicated"


class ArchiveService:
    def __init__(self, store):
        self.store = store

    def delete(self, image_id, owner):
        """Move a live image into the archive. Returns the archived record."""
        image = self.store.get_image(image_id, owner)

        try:
            archived = self.store.archive_image(image, deleted_at=utcnow())
        except StoreError as exc:
            raise ArchiveWriteFailed(
                "Failed to archive deleted photo.", image_id
            ) from exc

        try:
            removed = self.store.remove_image(image_id, owner)
        except StoreError as exc:
            logger.error(
                "Image %s archived but still live for %s; it is duplicated",
                image_id, owner,
            )
            raise LiveRemovalFailed("Failed to delete photo.", image_id) from exc

        if not removed:
            logger.warning("Image %s was already gone from live on delete", image_id)
        logger.info("Archived image %s for %s", image_id, owner)
        return archived

    def recover(self, image_id, owner):
        """Move an archived image back to live, keeping its id. Returns the live record."""
        archived = self.store.get_archived_image(image_id, owner)

        try:
            restored = self.store.restore_image(archived)
        except StoreError as exc:
            raise RecoverWriteFailed("Failed to recover photo.", image_id) from exc

        try:
            removed = self.store.remove_archived_image(image_id, owner)
        except StoreError as exc:
            logger.error(
                "Image %s restored but still archived for %s; it is duplicated",
                image_id, owner,
            )
            raise ArchiveRemovalFailed(
                "Failed to delete from archive.", image_id
            ) from exc

        if not removed:
            logger.warning("Image %s was already gone from archive on recover", image_id)
        logger.info("Recovered image %s for %s", image_id, owner)
        return restored

    def state(self, image_id, owner):
        """``live``, ``archived``, ``duplicated`` (a move stopped halfway) or None."""
        live = self.store.find_image(image_id, owner) is not None
        archived = self.store.find_archived_image(image_id, owner) is not None
        if live and archived:
            return DUPLICATED
        if live:
            return LIVE
        if archived:
            return ARCHIVED
        return None
