"""SQLModel table exports."""

from .account import BankAccount
from .bill import Bill, BillPayment, BillReminder
from .budget import Budget, BudgetCategory
from .family import Family
from .investment import Investment, InvestmentEvent
from .transaction import Transaction
from .user import User

__all__ = [
    "BankAccount",
    "Bill",
    "BillPayment",
    "BillReminder",
    "Budget",
    "BudgetCategory",
    "Family",
    "Investment",
    "InvestmentEvent",
    "Transaction",
    "User",
]
