"""SQLAlchemy models for the bankledger database."""

from sqlalchemy import (
    Boolean,
    Column,
    Date,
    Integer,
    String,
    create_engine,
)
from sqlalchemy.orm import Session, declarative_base, sessionmaker

Base = declarative_base()


class EntryRecord(Base):
    """Ledger entry model.

    Amounts are stored as decimal strings so that saved values load back
    exactly, whatever the backend's numeric affinity.
    """

    __tablename__ = "entries"

    id = Column(Integer, primary_key=True)
    position = Column(Integer, nullable=False, index=True)
    account_bank = Column(String, nullable=False)
    account_name = Column(String, nullable=False)
    account_code = Column(String, nullable=False)
    account_initial_balance = Column(String, nullable=False, default="0")
    operation_date = Column(Date, nullable=False)
    value_date = Column(Date, nullable=False)
    label = Column(String, nullable=False)
    description = Column(String, nullable=False, default="")
    debit = Column(String, nullable=False, default="0")
    credit = Column(String, nullable=False, default="0")
    category = Column(String, nullable=False)
    is_new = Column(Boolean, default=True, nullable=False)
    is_duplicate = Column(Boolean, default=False, nullable=False)


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
