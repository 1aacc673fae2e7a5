"""SQLAlchemy table models for owners and listings."""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import JSON, Boolean, DateTime, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship

from core.constants import LISTINGS_TABLE_NAME, OWNERS_TABLE_NAME


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """Declarative base for listing store tables."""


class OwnerRow(Base):
    """A listing owner, unique by email."""

    __tablename__ = OWNERS_TABLE_NAME

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    avatar: Mapped[str] = mapped_column(String(1024), nullable=False)
    owner_type: Mapped[str] = mapped_column(String(16), nullable=False)
    password_hash: Mapped[str] = mapped_column(String(128), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utc_now)

    listings: Mapped[list["ListingRow"]] = relationship("ListingRow", back_populates="owner")

    def __repr__(self) -> str:
        return f"<OwnerRow {self.id}: {self.email}>"


class ListingRow(Base):
    """A rental listing created by the importer."""

    __tablename__ = LISTINGS_TABLE_NAME

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    owner_id: Mapped[int] = mapped_column(
        Integer, ForeignKey(f"{OWNERS_TABLE_NAME}.id"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    city: Mapped[str] = mapped_column(String(128), nullable=False)
    preview_photo: Mapped[str] = mapped_column(String(1024), nullable=False)
    photos: Mapped[list[str]] = mapped_column(JSON, nullable=False)
    is_premium: Mapped[bool] = mapped_column(Boolean, nullable=False)
    listing_type: Mapped[str] = mapped_column(String(16), nullable=False)
    rooms_count: Mapped[int] = mapped_column(Integer, nullable=False)
    guests_count: Mapped[int] = mapped_column(Integer, nullable=False)
    price: Mapped[int] = mapped_column(Integer, nullable=False)
    features: Mapped[list[str]] = mapped_column(JSON, nullable=False)
    latitude: Mapped[float] = mapped_column(Float, nullable=False)
    longitude: Mapped[float] = mapped_column(Float, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utc_now)

    owner: Mapped["OwnerRow"] = relationship("OwnerRow", back_populates="listings")

    def __repr__(self) -> str:
        return f"<ListingRow {self.id}: {self.name}>"
