"""Concrete repository implementations using SQLModel."""

from .account import SQLModelBankAccountRepository
from .bill import SQLModelBillRepository
from .budget import SQLModelBudgetRepository
from .investment import SQLModelInvestmentRepository
from .transaction import SQLModelTransactionRepository

__all__ = [
    "SQLModelBankAccountRepository",
    "SQLModelBillRepository",
    "SQLModelBudgetRepository",
    "SQLModelInvestmentRepository",
    "SQLModelTransactionRepository",
]
