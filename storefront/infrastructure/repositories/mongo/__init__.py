"""
MongoDB Repository Implementations.

Production implementations using pymongo (one collection per aggregate).
"""

from .carts import MongoCartRepository
from .orders import MongoOrderRepository
from .password_resets import MongoPasswordResetTokenRepository
from .products import MongoProductRepository
from .questions import MongoProductQuestionRepository
from .users import MongoUserRepository

__all__ = [
    "MongoUserRepository",
    "MongoCartRepository",
    "MongoOrderRepository",
    "MongoProductRepository",
    "MongoProductQuestionRepository",
    "MongoPasswordResetTokenRepository",
]
