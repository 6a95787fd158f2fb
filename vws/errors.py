"""Error types raised by the VWS client."""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping, Optional

RESULT_CODES: Mapping[str, str] = MappingProxyType(
    {
        "AuthenticationFailure": "Signature authentication failed",
        "RequestTimeTooSkewed": "Request timestamp outside allowed range",
        "TargetNameExist": "The corresponding target name already exists",
        "RequestQuotaReached": (
            "The maximum number of API calls for this database has been reached"
        ),
        "TargetStatusProcessing": (
            "The target is in the processing state and cannot be updated"
        ),
        "TargetStatusNotSuccess": (
            "The request could not be completed because the target is not "
            "in the success state"
        ),
        "TargetQuotaReached": (
            "The maximum number of targets for this database has been reached"
        ),
        "ProjectSuspended": (
            "The request could not be completed because this database has "
            "been suspended"
        ),
        "ProjectInactive": (
            "The request could not be completed because this database is inactive"
        ),
        "ProjectHasNoApiAccess": (
            "The request could not be completed because this database is not "
            "allowed to make API requests"
        ),
        "UnknownTarget": "The specified target ID does not exist",
        "BadImage": "Image corrupted or format not supported",
        "ImageTooLarge": "Image size exceeds maximum limit",
        "MetadataTooLarge": "Target metadata size exceeds maximum limit",
        "DateRangeError": "Start date is after the end date",
        "Fail": (
            "The request was invalid and could not be processed "
            "(Check the request headers and fields)"
        ),
    }
)

RATE_LIMIT_CODE = "RequestQuotaReached"


class VwsError(Exception):
    """Base class for every error raised by this package."""


class PreconditionError(VwsError, ValueError):
    """Invalid input detected before any request was sent."""


class ApiError(VwsError):
    """A 4xx response decoded from the service's error envelope."""

    def __init__(
        self,
        result_code: str,
        transaction_id: str = "",
        status_code: Optional[int] = None,
    ) -> None:
        self.result_code = result_code
        self.transaction_id = transaction_id
        self.status_code = status_code
        super().__init__(
            f"vuforia request failed (ResultCode = {result_code}, "
            f"Transaction ID = {transaction_id}): {self.description}"
        )

    @property
    def description(self) -> str:
        return RESULT_CODES.get(self.result_code, "")

    def is_code(self, result_code: str) -> bool:
        return self.result_code.lower() == result_code.lower()

    @property
    def is_rate_limited(self) -> bool:
        return self.is_code(RATE_LIMIT_CODE)


class ServerError(VwsError):
    """A 5xx response; the body is not decoded."""

    def __init__(self, status_code: int) -> None:
        self.status_code = status_code
        super().__init__(
            f"the server encountered an internal error (Status = {status_code}); "
            "please retry the request"
        )


class WaitCancelled(VwsError):
    """The processing waiter was cancelled before a terminal status."""

    def __init__(self, target_id: str, message: Optional[str] = None) -> None:
        self.target_id = target_id
        super().__init__(message or f"waiting for target {target_id} was cancelled")


class WaitTimeout(WaitCancelled):
    """The processing waiter ran past its deadline."""

    def __init__(self, target_id: str, timeout: float) -> None:
        self.timeout = timeout
        super().__init__(
            target_id,
            f"target {target_id} still processing after {timeout:g}s",
        )
