"""SQLAlchemy models for chequetrack database."""

from datetime import datetime, UTC
from sqlalchemy import (
    CheckConstraint,
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
    Date,
    Index,
    Numeric,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()


def _utcnow() -> datetime:
    return datetime.now(UTC)


class Account(Base):
    """Account model."""

    __tablename__ = "accounts"

    id = Column(Integer, primary_key=True)
    name = Column(String, unique=True, nullable=False)
    opening_balance = Column(Numeric(14, 2), nullable=False, default=0)
    created_at = Column(DateTime, default=_utcnow, nullable=False)

    instruments = relationship("Instrument", back_populates="account", cascade="all, delete-orphan")


class Instrument(Base):
    """Instrument model (cheque, deposit or withdrawal)."""

    __tablename__ = "instruments"

    id = Column(Integer, primary_key=True)
    account_id = Column(Integer, ForeignKey("accounts.id"), nullable=False)
    # Stored as plain strings so legacy values survive a round trip
    kind = Column(String, nullable=False)
    amount = Column(Numeric(14, 2), nullable=False)
    status = Column(String, nullable=False, default="pending")
    due_date = Column(Date, nullable=False)
    created_date = Column(Date, nullable=False)
    cheque_number = Column(String, nullable=True)
    payee = Column(String, nullable=True)
    description = Column(String, nullable=True)
    reference_number = Column(String, nullable=True)
    created_at = Column(DateTime, default=_utcnow, nullable=False)
    updated_at = Column(DateTime, default=_utcnow, onupdate=_utcnow, nullable=False)

    __table_args__ = (
        CheckConstraint("amount > 0", name="ck_instrument_amount_positive"),
        Index("ix_instruments_account_due", "account_id", "due_date"),
        Index("ix_instruments_status_due", "status", "due_date"),
    )

    account = relationship("Account", back_populates="instruments")


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
