"""
Dependency Injection Container.

Centralized container for creating and managing application dependencies.
Implements Dependency Inversion Principle by wiring concrete implementations to interfaces.
"""

from __future__ import annotations

import logging

from app.config.settings import Settings

from .base import BaseContainer
from .clinic_booking import ClinicBookingContainer

logger = logging.getLogger(__name__)


class DependencyContainer:
    """
    Dependency Injection Container (Facade).

    Single Responsibility: Compose and delegate to domain-specific containers.
    """

    def __init__(self, settings: Settings | None = None):
        self._base = BaseContainer(settings)
        self._clinic_booking = ClinicBookingContainer(self._base)
        logger.info("DependencyContainer initialized")

    @property
    def settings(self) -> Settings:
        return self._base.settings

    @property
    def base(self) -> BaseContainer:
        return self._base

    @property
    def clinic_booking(self) -> ClinicBookingContainer:
        return self._clinic_booking


_container: DependencyContainer | None = None


def get_container(settings: Settings | None = None) -> DependencyContainer:
    """
    Get global container instance (singleton).

    Args:
        settings: Optional settings (only used on first call)

    Returns:
        DependencyContainer instance
    """
    global _container

    if _container is None:
        _container = DependencyContainer(settings)

    return _container


def reset_container() -> None:
    """
    Reset global container instance.

    Useful for testing or reconfiguration.
    """
    global _container
    logger.info("Resetting global DependencyContainer")
    _container = None


__all__ = [
    "BaseContainer",
    "ClinicBookingContainer",
    "DependencyContainer",
    "get_container",
    "reset_container",
]
