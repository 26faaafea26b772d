"""SQLAlchemy models for cashpanel database."""

from datetime import datetime, UTC
from sqlalchemy import (
    BigInteger,
    Boolean,
    Column,
    Date,
    DateTime,
    Integer,
    Numeric,
    String,
    create_engine,
)
from sqlalchemy.orm import declarative_base, sessionmaker, Session

Base = declarative_base()


class LedgerEntry(Base):
    """Ledger entry model."""

    __tablename__ = "ledger_entries"

    # Ids are generated by the application (time-based), not autoincremented
    id = Column(BigInteger, primary_key=True, autoincrement=False)
    description = Column(String, nullable=False)
    category = Column(String, nullable=False)
    kind = Column(String(16), nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    expected_amount = Column(Numeric(12, 2), nullable=True)
    date = Column(Date, nullable=False, index=True)
    status = Column(String(16), nullable=False)
    installment_index = Column(Integer, nullable=True)
    installment_total = Column(Integer, nullable=True)
    is_recurring = Column(Boolean, default=False, nullable=False)
    series_id = Column(String(32), nullable=True, index=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
