"""
============================================================
TARJETA CRC
============================================================
Class: storefront.infrastructure.repositories (Package exports)

Responsibilities:
- Exponer implementaciones concretas de repositorios (Mongo e InMemory)
  en un único punto de importación.

Collaborators:
- Repositorios Mongo (pymongo)
- Repositorios InMemory (testing / desarrollo sin base)
============================================================
"""

# ---------------------------
# In-memory implementations
# Usados para tests y entornos volátiles. No persisten tras reiniciar.
# ---------------------------
from .in_memory.carts import InMemoryCartRepository
from .in_memory.orders import InMemoryOrderRepository
from .in_memory.password_resets import InMemoryPasswordResetTokenRepository
from .in_memory.products import InMemoryProductRepository
from .in_memory.questions import InMemoryProductQuestionRepository
from .in_memory.users import InMemoryUserRepository

# ---------------------------
# MongoDB implementations
# ---------------------------
from .mongo.carts import MongoCartRepository
from .mongo.orders import MongoOrderRepository
from .mongo.password_resets import MongoPasswordResetTokenRepository
from .mongo.products import MongoProductRepository
from .mongo.questions import MongoProductQuestionRepository
from .mongo.users import MongoUserRepository

__all__ = [
    # Mongo
    "MongoUserRepository",
    "MongoCartRepository",
    "MongoOrderRepository",
    "MongoProductRepository",
    "MongoProductQuestionRepository",
    "MongoPasswordResetTokenRepository",
    # In-memory
    "InMemoryUserRepository",
    "InMemoryCartRepository",
    "InMemoryOrderRepository",
    "InMemoryProductRepository",
    "InMemoryProductQuestionRepository",
    "InMemoryPasswordResetTokenRepository",
]
