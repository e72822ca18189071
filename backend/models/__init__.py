# Import all models so they register with SQLAlchemy Base.metadata
# This ensures Base.metadata.create_all() creates all tables

from models.user import User
from models.budget import Budget
from models.expense import Expense

__all__ = [
    "User",
    "Budget",
    "Expense",
]
