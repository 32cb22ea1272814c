"""SQLAlchemy models for fundplan database."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
    Date,
    Numeric,
    Boolean,
    UniqueConstraint,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

from fundplan.domain.constants import DEFAULT_EXCHANGE_RATE, DEFAULT_GROUP_COLOR

Base = declarative_base()


class PlanSettings(Base):
    """Single-row plan settings model."""

    __tablename__ = "plan_settings"

    id = Column(Integer, primary_key=True)
    exchange_rate = Column(Numeric(18, 6), default=DEFAULT_EXCHANGE_RATE, nullable=False)


class Account(Base):
    """Funds account model."""

    __tablename__ = "accounts"

    id = Column(Integer, primary_key=True)
    name = Column(String, unique=True, nullable=False)
    currency = Column(String(3), nullable=False)
    balance = Column(Numeric(18, 6), default=0, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


class Group(Base):
    """Budget group model with hierarchical structure."""

    __tablename__ = "groups"

    id = Column(Integer, primary_key=True)
    name = Column(String, unique=True, nullable=False)
    color = Column(String, default=DEFAULT_GROUP_COLOR, nullable=False)
    percentage = Column(Numeric(9, 4), default=100, nullable=False)
    parent_id = Column(Integer, ForeignKey("groups.id"), nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    parent = relationship("Group", remote_side=[id], backref="children")
    investments = relationship("Investment", back_populates="group")


class Investment(Base):
    """Investment target model."""

    __tablename__ = "investments"

    id = Column(Integer, primary_key=True)
    name = Column(String, unique=True, nullable=False)
    percentage = Column(Numeric(9, 4), default=0, nullable=False)
    group_id = Column(Integer, ForeignKey("groups.id"), nullable=True)
    position = Column(Integer, default=0, nullable=False)
    recurrence_type = Column(String, default="monthly", nullable=False)
    custom_value = Column(Integer, nullable=True)
    custom_unit = Column(String, nullable=True)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    group = relationship("Group", back_populates="investments")
    priority_entries = relationship(
        "InvestmentAccount",
        back_populates="investment",
        cascade="all, delete-orphan",
        order_by="InvestmentAccount.priority",
    )
    completion_entries = relationship(
        "CompletionEntry",
        back_populates="investment",
        cascade="all, delete-orphan",
        order_by="CompletionEntry.id",
    )


class InvestmentAccount(Base):
    """Account priority entry of an investment (lower priority drains first)."""

    __tablename__ = "investment_accounts"

    id = Column(Integer, primary_key=True)
    investment_id = Column(Integer, ForeignKey("investments.id"), nullable=False)
    account_id = Column(Integer, ForeignKey("accounts.id"), nullable=False)
    priority = Column(Integer, nullable=False)

    __table_args__ = (
        UniqueConstraint("investment_id", "account_id", name="uq_investment_account"),
    )

    # Relationships
    investment = relationship("Investment", back_populates="priority_entries")


class CompletionEntry(Base):
    """Completion history entry for a scheduled contribution date."""

    __tablename__ = "completion_entries"

    id = Column(Integer, primary_key=True)
    investment_id = Column(Integer, ForeignKey("investments.id"), nullable=False)
    date = Column(Date, nullable=False)
    completed = Column(Boolean, default=True, nullable=False)

    # One entry per calendar date per investment
    __table_args__ = (
        UniqueConstraint("investment_id", "date", name="uq_investment_completion_date"),
    )

    # Relationships
    investment = relationship("Investment", back_populates="completion_entries")


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
