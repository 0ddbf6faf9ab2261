"""
SQLAlchemy ORM models for the printing catalog.

One row per printing. Rows are written by the catalog import job and only
read by the lookup path.
"""

from datetime import date, datetime

from sqlalchemy import (
    JSON,
    Date,
    DateTime,
    Integer,
    String,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


class CardPrintingDB(Base):
    """
    A single card printing.

    `collector_sort` holds the leading digits of the collector number as an
    integer (0 when there are none) so ordering is numeric on every backend.
    """

    __tablename__ = "card_printings"
    __table_args__ = (
        UniqueConstraint("set_code", "collector_number", "name", name="uq_printing_set_number"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    scryfall_id: Mapped[str | None] = mapped_column(String(64), unique=True, nullable=True)
    name: Mapped[str] = mapped_column(String(255), index=True)
    set_code: Mapped[str] = mapped_column(String(16), index=True)
    set_name: Mapped[str] = mapped_column(String(255), default="")
    collector_number: Mapped[str] = mapped_column(String(32))
    collector_sort: Mapped[int] = mapped_column(Integer, default=0)
    released_at: Mapped[date | None] = mapped_column(Date, nullable=True, index=True)
    finishes: Mapped[list[str]] = mapped_column(JSON, default=list)

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    def __repr__(self) -> str:
        return (
            f"<CardPrintingDB(name={self.name}, set={self.set_code}, "
            f"number={self.collector_number})>"
        )
