"""
In-Memory Repository Implementations.

For testing and local development. NOT FOR PRODUCTION.
Data is lost on process restart.
"""

from .carts import InMemoryCartRepository
from .orders import InMemoryOrderRepository
from .password_resets import InMemoryPasswordResetTokenRepository
from .products import InMemoryProductRepository
from .questions import InMemoryProductQuestionRepository
from .users import InMemoryUserRepository

__all__ = [
    "InMemoryUserRepository",
    "InMemoryCartRepository",
    "InMemoryOrderRepository",
    "InMemoryProductRepository",
    "InMemoryProductQuestionRepository",
    "InMemoryPasswordResetTokenRepository",
]
