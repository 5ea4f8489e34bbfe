"""SQLAlchemy ORM models."""
import uuid
from datetime import datetime, timezone

from sqlalchemy import BigInteger, CheckConstraint, Column, DateTime, ForeignKey, Index, String
from sqlalchemy.orm import relationship

from app.infrastructure.database.base import Base
from app.modules.audio.models import AudioCategory


def generate_uuid() -> str:
    return str(uuid.uuid4())


def utcnow() -> datetime:
    # client-side timestamps keep microsecond precision for newest-first ordering
    return datetime.now(timezone.utc)


class Account(Base):
    __tablename__ = "accounts"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    username = Column(String(50), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    audio_files = relationship(
        "AudioFile",
        back_populates="owner",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class AudioFile(Base):
    __tablename__ = "audio_files"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    title = Column(String(200), nullable=False)
    description = Column(String(1000), nullable=True)
    category = Column(String(32), nullable=False)
    s3_key = Column(String(1024), unique=True, nullable=False)
    s3_url = Column(String(2048), nullable=True)
    file_name = Column(String(255), nullable=False)
    file_size = Column(BigInteger, nullable=False)
    mime_type = Column(String(100), nullable=False)
    owner_id = Column(
        String(36),
        ForeignKey("accounts.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    owner = relationship("Account", back_populates="audio_files")

    __table_args__ = (
        CheckConstraint(
            "category IN ({})".format(", ".join(f"'{name}'" for name in AudioCategory.values())),
            name="ck_audio_files_category",
        ),
        Index("ix_audio_files_owner_created", "owner_id", "created_at"),
        Index("ix_audio_files_owner_file_name", "owner_id", "file_name"),
    )
