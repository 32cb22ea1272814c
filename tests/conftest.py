"""Shared pytest fixtures for fundplan tests."""

import tempfile
import os
from datetime import date
from decimal import Decimal
import pytest

from fundplan.database.factories import create_sqlite_database
from fundplan.domain.account import AccountService
from fundplan.domain.group import GroupService
from fundplan.domain.investment import InvestmentService
from fundplan.domain.plan import PlanService


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    # Create database
    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def account_service(temp_db):
    """Create an AccountService with a temporary database."""
    return AccountService(temp_db)


@pytest.fixture
def group_service(temp_db):
    """Create a GroupService with a temporary database."""
    return GroupService(temp_db)


@pytest.fixture
def investment_service(temp_db):
    """Create an InvestmentService with a temporary database."""
    return InvestmentService(temp_db)


@pytest.fixture
def plan_service(temp_db):
    """Create a PlanService with a temporary database."""
    return PlanService(temp_db)


@pytest.fixture
def sample_accounts(account_service):
    """Create a THB savings account and a USD brokerage account."""
    savings_id = account_service.create_account(
        name="Savings", currency="THB", balance=Decimal("10000")
    )
    brokerage_id = account_service.create_account(
        name="Brokerage", currency="USD", balance=Decimal("100")
    )
    return {
        "savings": account_service.get_account(savings_id),
        "brokerage": account_service.get_account(brokerage_id),
    }


@pytest.fixture
def sample_investment(investment_service, sample_accounts):
    """Create a monthly investment drawing from savings."""
    investment_id = investment_service.create_investment(
        name="Index Fund",
        percentage=Decimal("25"),
        account_priority=[sample_accounts["savings"].id],
        start_date=date(2024, 1, 1),
        end_date=date(2024, 3, 1),
    )
    return investment_service.get_investment(investment_id)


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
