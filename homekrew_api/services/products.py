"""Product catalog service."""

from __future__ import annotations

from typing import Any

from homekrew_api.models.responses import ApiResponse
from homekrew_api.services.base import BaseService


class ProductsService(BaseService):
    """Product categories and product listings."""

    async def get_product_categories(self) -> ApiResponse[Any]:
        response = await self._client.get(
            self._path("categories"), params={"type": "product", "level": 1}
        )
        if not response.success:
            return self._failure(response)

        return ApiResponse.ok(
            response.data,
            status=response.status,
            message="Product categories fetched successfully",
            pagination=self._pagination(response.data),
        )

    async def get_products(
        self, page: int, limit: int, category_id: str | None = None
    ) -> ApiResponse[list]:
        response = await self._client.get(
            self._path("products"),
            params=self._params(page=page, limit=limit, category=category_id),
        )
        if not response.success:
            return self._failure(response)

        return ApiResponse.ok(
            self._field(response.data, "products") or [],
            status=response.status,
            message="Products fetched successfully",
            pagination=self._pagination(response.data),
        )

    async def get_product_by_id(self, product_id: str) -> ApiResponse[Any]:
        response = await self._client.get(self._path("products", product_id))
        if not response.success:
            return self._failure(response)

        return ApiResponse.ok(
            response.data,
            status=response.status,
            message="Product fetched successfully",
        )
