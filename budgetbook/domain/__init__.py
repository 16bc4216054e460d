"""Domain models and types for budgetbook.

This package contains the functional core:
- Pure functions with no side effects
- No I/O operations
- Easy to test
- Business logic separated from infrastructure
"""

from budgetbook.domain.models import CategoryName, Description, Money, MonthKey, TransactionKind

__all__ = ["Money", "MonthKey", "CategoryName", "Description", "TransactionKind"]
