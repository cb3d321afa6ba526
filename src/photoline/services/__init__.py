"""Application services - business logic on top of the repositories."""

from .access import AccessCore, Permission
from .asset_service import AssetService
from .timeline_service import TimelineService, ValidationResult, check_partner_filters, timeline_partner_ids

__all__ = [
    "AccessCore",
    "AssetService",
    "Permission",
    "TimelineService",
    "ValidationResult",
    "check_partner_filters",
    "timeline_partner_ids",
]
