"""Registration bounded context: service, decorators, endpoints and transport."""

from __future__ import annotations

from typing import Any

from mud.monitoring.metrics import Metrics, get_metrics
from mud.registration.instrumentation import InstrumentingRegistrationService
from mud.registration.logging import LoggingRegistrationService
from mud.registration.repository import RegistrationRepository
from mud.registration.service import BasicRegistrationService, RegistrationService


def build_registration_service(
    repository: RegistrationRepository,
    *,
    metrics: Metrics | None = None,
    logger: Any = None,
) -> RegistrationService:
    """Compose the standard chain: logging -> instrumentation -> service."""
    service: RegistrationService = BasicRegistrationService(repository)
    service = InstrumentingRegistrationService(service, metrics or get_metrics())
    service = LoggingRegistrationService(service, logger=logger)
    return service


__all__ = [
    "BasicRegistrationService",
    "InstrumentingRegistrationService",
    "LoggingRegistrationService",
    "RegistrationService",
    "build_registration_service",
]
