"""Account domain service."""

import logging
from decimal import Decimal
from typing import Optional

from fundplan.database.base import Database
from fundplan.domain.constants import BASE_CURRENCY, SUPPORTED_CURRENCIES
from fundplan.domain.entities import Account as AccountEntity
from fundplan.domain.errors import (
    ConflictError,
    DependencyError,
    NotFoundError,
    ValidationError,
    account_delete_blocked,
    account_not_found,
)

logger = logging.getLogger(__name__)


def _validate_currency(currency: str) -> str:
    code = currency.strip().upper()
    if code not in SUPPORTED_CURRENCIES:
        raise ValidationError(
            f"Unsupported currency '{currency}'. Supported: {', '.join(SUPPORTED_CURRENCIES)}"
        )
    return code


def _validate_balance(balance: Decimal) -> Decimal:
    if not balance.is_finite() or balance < 0:
        raise ValidationError(f"Balance must be a non-negative amount, got {balance}")
    return balance


class AccountService:
    """Service for managing accounts."""

    def __init__(self, db: Database):
        """Initialize account service.

        Args:
            db: Database instance
        """
        self.db = db

    def _check_name(self, name: str, exclude_id: Optional[int] = None) -> str:
        name = name.strip()
        if not name:
            raise ValidationError("Account name cannot be empty")
        for acc in self.db.list_accounts():
            if acc.id != exclude_id and acc.name == name:
                raise ConflictError(f"Account with name '{name}' already exists")
        return name

    def create_account(
        self, name: str, currency: str = BASE_CURRENCY, balance: Decimal = Decimal("0")
    ) -> int:
        """Create a new account.

        Args:
            name: Account name
            currency: Currency code (THB or USD)
            balance: Opening balance in the account currency

        Returns:
            Account ID

        Raises:
            ValidationError: If name, currency or balance is invalid
            ConflictError: If account name already exists
        """
        name = self._check_name(name)
        account_id = self.db.create_account(
            name=name,
            currency=_validate_currency(currency),
            balance=_validate_balance(balance),
        )
        logger.info("Created account %s (%s)", account_id, name)
        return account_id

    def get_account(self, account_id: int) -> Optional[AccountEntity]:
        """Get account by ID.

        Returns:
            Account entity or None if not found
        """
        return self.db.get_account(account_id)

    def list_accounts(self) -> list[AccountEntity]:
        """List all accounts."""
        return self.db.list_accounts()

    def update_account(
        self,
        account_id: int,
        name: Optional[str] = None,
        currency: Optional[str] = None,
        balance: Optional[Decimal] = None,
    ) -> None:
        """Update an account's name, currency or balance.

        Args:
            account_id: Account ID to update
            name: Optional new name
            currency: Optional new currency code
            balance: Optional new balance

        Raises:
            NotFoundError: If account not found
            ConflictError: If the new name already exists
            ValidationError: If currency or balance is invalid
        """
        if self.db.get_account(account_id) is None:
            raise NotFoundError(account_not_found(account_id))

        self.db.update_account(
            account_id=account_id,
            name=self._check_name(name, exclude_id=account_id) if name is not None else None,
            currency=_validate_currency(currency) if currency is not None else None,
            balance=_validate_balance(balance) if balance is not None else None,
        )
        logger.info("Updated account %s", account_id)

    def delete_account(self, account_id: int) -> None:
        """Delete an account.

        Raises:
            NotFoundError: If account not found
            DependencyError: If an investment still lists the account in its priority
        """
        if self.db.get_account(account_id) is None:
            raise NotFoundError(account_not_found(account_id))

        dependents = self.db.list_investments_using_account(account_id)
        if dependents:
            raise DependencyError(
                account_delete_blocked(account_id, [inv.name for inv in dependents])
            )

        self.db.delete_account(account_id)
        logger.info("Deleted account %s", account_id)
