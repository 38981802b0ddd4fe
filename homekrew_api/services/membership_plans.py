"""Membership plan listing and purchase."""

from __future__ import annotations

from typing import Any

from homekrew_api.models.responses import ApiResponse
from homekrew_api.services.base import BaseService

PAYMENT_METHOD = "razorpay"


class MembershipPlansService(BaseService):

    async def get_membership_plans(self) -> ApiResponse[list]:
        response = await self._client.get(self._path("memberships", "plans"))
        if not response.success:
            return self._failure(response)
        return ApiResponse.ok(response.data, status=response.status)

    async def buy_membership_plan(self, plan_id: str) -> ApiResponse[Any]:
        """Create a payment order; returns the gateway order object."""
        response = await self._client.post(
            self._path("payments", "membership"),
            {"planId": plan_id, "paymentMethod": PAYMENT_METHOD},
        )
        if not response.success:
            return self._failure(response)
        return ApiResponse.ok(
            self._field(response.data, "razorpayOrder"), status=response.status
        )
