"""Per-domain service adapters built on ``ApiClient``."""

from homekrew_api.services.auth import AuthService
from homekrew_api.services.base import BaseService
from homekrew_api.services.membership_plans import MembershipPlansService
from homekrew_api.services.products import ProductsService
from homekrew_api.services.service_categories import ServiceCategoriesService

__all__ = [
    "AuthService",
    "BaseService",
    "MembershipPlansService",
    "ProductsService",
    "ServiceCategoriesService",
]
