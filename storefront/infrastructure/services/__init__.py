"""
Infrastructure Services (Infrastructure Layer)

Adapters concretos de los puertos de domain/services.py.
"""

from .logging_notifier import LoggingPasswordResetNotifier

__all__ = ["LoggingPasswordResetNotifier"]
