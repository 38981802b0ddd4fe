"""Authentication and user profile service.

``verify_otp`` is the only writer of a fresh credential: it persists the
access token in the credential store and installs it as the client's
default token. ``logout`` clears both.
"""

from __future__ import annotations

import logging
from typing import Any

from homekrew_api.client.envelope import FilePart, MultipartBody
from homekrew_api.models.responses import ApiError, ApiResponse, ErrorCode
from homekrew_api.services.base import BaseService

logger = logging.getLogger(__name__)

_COUNTRY_PREFIX = "+91"


class AuthService(BaseService):
    """OTP login, session bootstrap and profile updates."""

    resource = "user"

    async def login(self, phone_number: str) -> ApiResponse[bool]:
        """Request an OTP for ``phone_number``."""
        response = await self._client.post(
            self._path("authenticate"), {"phoneNumber": phone_number}
        )
        if not response.success:
            return self._failure(response)

        return ApiResponse.ok(True, status=response.status, message="OTP sent successfully")

    async def verify_otp(self, phone_number: str, otp: str) -> ApiResponse[dict]:
        """Verify the OTP and store the returned access token."""
        response = await self._client.post(
            self._path("verify"),
            {"phoneNumber": phone_number.removeprefix(_COUNTRY_PREFIX), "otp": otp},
        )
        if not response.success:
            return self._failure(response)

        access_token = self._field(response.data, "accessToken")
        if not isinstance(access_token, str) or not access_token:
            logger.error("OTP verification response did not include an access token")
            return ApiResponse.fail(
                ApiError(
                    message="Verification response did not include an access token",
                    status=response.status,
                    code=ErrorCode.UNKNOWN,
                    details=response.data,
                )
            )

        await self._client.store.set(access_token)
        self._client.set_auth_token(access_token)
        logger.info("OTP verified; session credential stored")

        user = self._field(response.data, "user")
        if not isinstance(user, dict):
            user = {}
        return ApiResponse.ok(
            {**user, "accessToken": access_token},
            status=response.status,
            message="OTP verified successfully",
        )

    async def current_user(self) -> ApiResponse[dict]:
        """Fetch the signed-in user; a 401 here invalidates the session."""
        response = await self._client.get(self._path("current-user"))
        if not response.success:
            return self._failure(response)

        return ApiResponse.ok(
            response.data,
            status=response.status,
            message="User data fetched successfully",
        )

    async def edit_profile(self, body: dict[str, Any]) -> ApiResponse[dict]:
        response = await self._client.put(self._path("profile"), body)
        if not response.success:
            return self._failure(response, "User profile update failed")

        return ApiResponse.ok(
            response.data,
            status=response.status,
            message=response.message or "User profile update successful",
        )

    async def update_profile_picture(
        self,
        filename: str,
        content: bytes,
        content_type: str = "image/jpeg",
    ) -> ApiResponse[dict]:
        """Upload a new profile image as the multipart field ``image``."""
        form = MultipartBody(
            files={
                "image": FilePart(
                    filename=filename or "profile-image.jpg",
                    content=content,
                    content_type=content_type or "image/jpeg",
                )
            }
        )
        response = await self._client.upload(self._path("profile"), form, method="PUT")
        if not response.success:
            return self._failure(response, "Profile picture update failed")

        user = self._field(response.data, "user")
        return ApiResponse.ok(
            user if user is not None else response.data,
            status=response.status,
            message=response.message or "Profile picture update successful",
        )

    async def register_fcm_token(
        self, fcm_token: str, device_id: str, platform: str
    ) -> ApiResponse[Any]:
        response = await self._client.post(
            self._path("fcm-register"),
            {"fcmToken": fcm_token, "deviceId": device_id, "platform": platform},
        )
        if not response.success:
            return self._failure(response, "FCM token registration failed")

        return ApiResponse.ok(
            response.data,
            status=response.status,
            message=response.message or "FCM token registration successful",
        )

    async def logout(self) -> None:
        """Forget the session locally."""
        self._client.remove_auth_token()
        await self._client.store.remove()
        logger.info("Logged out; session credential removed")
