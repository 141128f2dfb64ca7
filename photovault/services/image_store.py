"""Owner-scoped persistence for live and archived images.

Every query filters by both id and owner. Each write commits on its own, so
a caller composing several writes gets no atomicity across them.
"""
import logging
from contextlib import contextmanager

from sqlalchemy import and_
from sqlalchemy import exc as sa_exc

from photovault.errors import NotFound, StoreError, StoreTimeout
from photovault.models.image import ArchivedImage, Image, utcnow

logger = logging.getLogger(__name__)

_TIMEOUT_MARKERS = ("timeout", "timed out", "database is locked", "canceling statement")


def _is_timeout(exc):
    if isinstance(exc, sa_exc.TimeoutError):
        return True
    if isinstance(exc, sa_exc.OperationalError):
        text = str(exc.orig).lower()
        return any(marker in text for marker in _TIMEOUT_MARKERS)
    return False


class ImageStore:
    def __init__(self, db):
        self.db = db

    @property
    def session(self):
        return self.db.session

    @contextmanager
    def _guard(self, action, commit=False):
        try:
            yield self.session
            if commit:
                self.session.commit()
        except sa_exc.SQLAlchemyError as exc:
            self.session.rollback()
            if _is_timeout(exc):
                logger.error("Timed out trying to %s", action)
                raise StoreTimeout(f"Timed out trying to {action}.") from exc
            logger.exception("Failed to %s", action)
            raise StoreError(f"Failed to {action}.") from exc

    # Live images

    def add_image(self, owner, name, data, uploaded_at=None):
        """Insert a new live image; the database assigns the id."""
        image = Image(owner=owner, name=name, data=data)
        if uploaded_at is not None:
            image.uploaded_at = uploaded_at
        with self._guard("store image", commit=True) as session:
            session.add(image)
        with self._guard("load stored image"):
            return image.to_record()

    def restore_image(self, record):
        """Insert a live row that keeps the id, name, payload and upload time of ``record``."""
        image = Image(
            id=record.id,
            owner=record.owner,
            name=record.name,
            data=record.data,
            uploaded_at=record.uploaded_at,
        )
        with self._guard("restore image", commit=True) as session:
            session.add(image)
        with self._guard("load restored image"):
            return image.to_record()

    def find_image(self, image_id, owner):
        with self._guard("fetch image"):
            image = Image.query.filter_by(id=image_id, owner=owner).first()
            return image.to_record() if image else None

    def get_image(self, image_id, owner):
        record = self.find_image(image_id, owner)
        if record is None:
            raise NotFound("Image not found.", {"image_id": image_id})
        return record

    def list_images(self, owner):
        """Live images of ``owner``, newest upload first, ties by id."""
        with self._guard("fetch images"):
            rows = (
                Image.query.filter_by(owner=owner)
                .order_by(Image.uploaded_at.desc(), Image.id.desc())
                .all()
            )
            return [row.to_record() for row in rows]

    def remove_image(self, image_id, owner):
        """Delete the live row. Returns the number of rows removed."""
        with self._guard("remove image", commit=True):
            return Image.query.filter_by(id=image_id, owner=owner).delete()

    # Archived images

    def archive_image(self, record, deleted_at=None):
        archived = ArchivedImage(
            id=record.id,
            owner=record.owner,
            name=record.name,
            data=record.data,
            uploaded_at=record.uploaded_at,
            deleted_at=deleted_at or utcnow(),
        )
        with self._guard("archive image", commit=True) as session:
            session.add(archived)
        with self._guard("load archived image"):
            return archived.to_record()

    def find_archived_image(self, image_id, owner):
        with self._guard("fetch archived image"):
            archived = ArchivedImage.query.filter_by(id=image_id, owner=owner).first()
            return archived.to_record() if archived else None

    def get_archived_image(self, image_id, owner):
        record = self.find_archived_image(image_id, owner)
        if record is None:
            raise NotFound("Image not found.", {"image_id": image_id})
        return record

    def remove_archived_image(self, image_id, owner):
        with self._guard("remove archived image", commit=True):
            return ArchivedImage.query.filter_by(id=image_id, owner=owner).delete()

    # Maintenance

    def find_duplicates(self):
        """(id, owner) pairs present in both tables, left by an interrupted move."""
        with self._guard("find duplicated images"):
            rows = (
                self.session.query(Image.id, Image.owner)
                .join(
                    ArchivedImage,
                    and_(
                        ArchivedImage.id == Image.id,
                        ArchivedImage.owner == Image.owner,
                    ),
                )
                .order_by(Image.id)
                .all()
            )
            return [(row.id, row.owner) for row in rows]

    def count_images(self, owner=None):
        """Return ``(live, archived)`` row counts, optionally for one owner."""
        with self._guard("count images"):
            live = Image.query
            archived = ArchivedImage.query
            if owner is not None:
                live = live.filter_by(owner=owner)
                archived = archived.filter_by(owner=owner)
            return live.count(), archived.count()
