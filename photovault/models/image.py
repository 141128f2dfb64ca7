from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from photovault.extensions import db


def utcnow():
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class ImageRecord:
    """Detached snapshot of a row, safe to pass between threads."""

    id: int
    name: str
    data: bytes
    owner: str
    uploaded_at: datetime
    deleted_at: Optional[datetime] = None


class Image(db.Model):
    __tablename__ = "images"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(255), nullable=False)
    data = db.Column(db.LargeBinary, nullable=False)
    owner = db.Column(db.String(255), nullable=False, index=True)
    uploaded_at = db.Column(
        db.DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    __table_args__ = (
        db.Index("ix_images_owner_uploaded_at", "owner", "uploaded_at"),
        # Ids of archived images must never be handed out again
        {"sqlite_autoincrement": True},
    )

    def to_record(self):
        return ImageRecord(
            id=self.id,
            name=self.name,
            data=bytes(self.data),
            owner=self.owner,
            uploaded_at=self.uploaded_at,
        )

    def __repr__(self):
        return f"<Image {self.id} {self.name!r} owner={self.owner}>"


class ArchivedImage(db.Model):
    __tablename__ = "deleted_images"

    # Carries the live id, never assigned here
    id = db.Column(db.Integer, primary_key=True, autoincrement=False)
    name = db.Column(db.String(255), nullable=False)
    data = db.Column(db.LargeBinary, nullable=False)
    owner = db.Column(db.String(255), nullable=False, index=True)
    uploaded_at = db.Column(db.DateTime(timezone=True), nullable=False)
    deleted_at = db.Column(
        db.DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    def to_record(self):
        return ImageRecord(
            id=self.id,
            name=self.name,
            data=bytes(self.data),
            owner=self.owner,
            uploaded_at=self.uploaded_at,
            deleted_at=self.deleted_at,
        )

    def __repr__(self):
        return f"<ArchivedImage {self.id} {self.name!r} owner={self.owner}>"
