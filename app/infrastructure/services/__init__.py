"""Infrastructure services: provisioning and outbound notification senders."""

from app.infrastructure.services.catalog_provisioning_service import (
    CatalogProvisioningService,
    ProvisioningSummary,
)
from app.infrastructure.services.notification_sender import LogOnlyNotificationSender

__all__ = [
    "CatalogProvisioningService",
    "LogOnlyNotificationSender",
    "ProvisioningSummary",
]
