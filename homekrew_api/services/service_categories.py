"""Service categories and service templates."""

from __future__ import annotations

from typing import Any

from homekrew_api.models.responses import ApiResponse
from homekrew_api.services.base import BaseService


class ServiceCategoriesService(BaseService):
    """Browse the service category tree and its templates."""

    async def get_categories(
        self,
        level: int,
        parent_category: str | None = None,
        page: int | None = None,
        limit: int | None = None,
        is_featured: bool | None = None,
    ) -> ApiResponse[list]:
        response = await self._client.get(
            self._path("categories"),
            params=self._params(
                type="service",
                level=level,
                parentCategory=parent_category,
                page=page,
                limit=limit,
                isFeatured=is_featured,
            ),
        )
        if not response.success:
            return self._failure(response)

        return ApiResponse.ok(
            self._field(response.data, "categories") or [],
            status=response.status,
            message="Service categories fetched successfully",
            pagination=self._pagination(response.data),
        )

    async def get_service_templates(self, category_id: str) -> ApiResponse[list]:
        response = await self._client.get(
            self._path("service-templates"), params={"category": category_id}
        )
        if not response.success:
            return self._failure(response)

        return ApiResponse.ok(
            self._field(response.data, "serviceTemplates") or [],
            status=response.status,
            message="Service templates fetched successfully",
            pagination=self._pagination(response.data),
        )

    async def get_service_template_by_id(self, template_id: str) -> ApiResponse[Any]:
        response = await self._client.get(self._path("service-templates", template_id))
        if not response.success:
            return self._failure(response)

        return ApiResponse.ok(
            response.data,
            status=response.status,
            message="Service template fetched successfully",
        )
