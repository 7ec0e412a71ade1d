"""
Fund Ledger

The single shared relief balance. Deposits come in through the owner,
payouts go out only through claim approval.
"""
import logging

from app.core.errors import BalanceOverflowError, InsufficientFundsError, InvalidAmountError

logger = logging.getLogger(__name__)

# Unsigned 128-bit ceiling of the on-chain balance
MAX_BALANCE = 2**128 - 1


class FundLedger:
    """Holds the fund balance and guards it against overflow and underflow."""

    def __init__(self, balance: int = 0):
        if balance < 0 or balance > MAX_BALANCE:
            raise ValueError(f"Initial balance out of range: {balance}")
        self._balance = balance

    @property
    def balance(self) -> int:
        return self._balance

    def deposit(self, amount: int) -> int:
        """
        Add funds to the pool.

        Args:
            amount: Positive amount to add

        Returns:
            The new balance

        Raises:
            InvalidAmountError: If amount is not positive
            BalanceOverflowError: If the balance would leave the 128-bit range
        """
        self.check_deposit(amount)

        self._balance += amount
        logger.info(f"Deposited {amount}, fund balance now {self._balance}")
        return self._balance

    def check_deposit(self, amount: int) -> None:
        """Raise what deposit(amount) would raise, without touching the balance."""
        if amount <= 0:
            raise InvalidAmountError(amount)
        if self._balance + amount > MAX_BALANCE:
            raise BalanceOverflowError(amount, self._balance)

    def withdraw(self, amount: int) -> int:
        """
        Take a payout out of the pool.

        Raises:
            InvalidAmountError: If amount is not positive
            InsufficientFundsError: If the balance cannot cover amount
        """
        if amount <= 0:
            raise InvalidAmountError(amount)
        if self._balance < amount:
            raise InsufficientFundsError(amount, self._balance)

        self._balance -= amount
        logger.info(f"Withdrew {amount}, fund balance now {self._balance}")
        return self._balance
