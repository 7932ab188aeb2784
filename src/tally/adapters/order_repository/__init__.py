"""Order repository adapters."""

from .memory import InMemoryOrderRepository
from .sqlalchemy_repository import SqlAlchemyOrderRepository

__all__ = ["InMemoryOrderRepository", "SqlAlchemyOrderRepository"]
