"""Repository protocol definitions for domain layer."""

from .account import BankAccountRepository
from .bill import BillRepository
from .budget import BudgetRepository
from .investment import InvestmentRepository
from .transaction import TransactionRepository

__all__ = [
    "BankAccountRepository",
    "BillRepository",
    "BudgetRepository",
    "InvestmentRepository",
    "TransactionRepository",
]
