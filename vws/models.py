"""Request and response payloads for the VWS target API."""

from __future__ import annotations

import base64
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Union

UNRATED = -1


def encode_image(image_bytes: bytes) -> str:
    """Base64-encode raw image bytes for the ``image`` field."""
    return base64.b64encode(image_bytes).decode("ascii")


def encode_metadata(metadata: Union[bytes, str]) -> str:
    """Base64-encode application metadata."""
    if isinstance(metadata, str):
        metadata = metadata.encode("utf-8")
    return base64.b64encode(metadata).decode("ascii")


def _omit_none(payload: Dict[str, Any]) -> Dict[str, Any]:
    return {key: value for key, value in payload.items() if value is not None}


def _str(data: Mapping[str, Any], key: str) -> str:
    value = data.get(key)
    return "" if value is None else str(value)


def _int(data: Mapping[str, Any], key: str, default: int = 0) -> int:
    value = data.get(key)
    return default if value is None else int(value)


def _float(data: Mapping[str, Any], key: str) -> float:
    value = data.get(key)
    return 0.0 if value is None else float(value)


def _bool(data: Mapping[str, Any], key: str) -> bool:
    return bool(data.get(key, False))


# Requests


@dataclass
class PostTargetRequest:
    name: str
    width: float
    # base64 encoded image, see encode_image()
    image: str
    active: Optional[bool] = None
    # base64 encoded, see encode_metadata()
    metadata: Optional[str] = None

    def to_payload(self) -> Dict[str, Any]:
        return _omit_none(
            {
                "name": self.name,
                "width": self.width,
                "image": self.image,
                "active_flag": self.active,
                "application_metadata": self.metadata,
            }
        )


@dataclass
class GetTargetRequest:
    target_id: str


@dataclass
class UpdateTargetRequest:
    """Partial update; fields left as ``None`` are not sent."""

    target_id: str
    name: Optional[str] = None
    width: Optional[float] = None
    image: Optional[str] = None
    active: Optional[bool] = None
    metadata: Optional[str] = None

    def to_payload(self) -> Dict[str, Any]:
        return _omit_none(
            {
                "name": self.name,
                "width": self.width,
                "image": self.image,
                "active_flag": self.active,
                "application_metadata": self.metadata,
            }
        )


@dataclass
class DeleteTargetRequest:
    target_id: str


@dataclass
class TargetSummaryRequest:
    target_id: str


# Responses


@dataclass
class PostTargetResponse:
    target_id: str
    transaction_id: str
    result_code: str

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "PostTargetResponse":
        return cls(
            target_id=_str(data, "target_id"),
            transaction_id=_str(data, "transaction_id"),
            result_code=_str(data, "result_code"),
        )


@dataclass
class TargetRecord:
    target_id: str = ""
    active: bool = False
    name: str = ""
    width: float = 0.0
    # -1 until the image has been rated, then 0..5
    tracking_rating: int = UNRATED

    @property
    def is_rated(self) -> bool:
        return self.tracking_rating >= 0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "TargetRecord":
        return cls(
            target_id=_str(data, "target_id"),
            active=_bool(data, "active_flag"),
            name=_str(data, "name"),
            width=_float(data, "width"),
            tracking_rating=_int(data, "tracking_rating", UNRATED),
        )


@dataclass
class GetTargetResponse:
    transaction_id: str
    result_code: str
    status: str
    target_record: TargetRecord = field(default_factory=TargetRecord)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "GetTargetResponse":
        return cls(
            transaction_id=_str(data, "transaction_id"),
            result_code=_str(data, "result_code"),
            status=_str(data, "status"),
            target_record=TargetRecord.from_dict(data.get("target_record") or {}),
        )


@dataclass
class UpdateTargetResponse:
    transaction_id: str
    result_code: str

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "UpdateTargetResponse":
        return cls(
            transaction_id=_str(data, "transaction_id"),
            result_code=_str(data, "result_code"),
        )


@dataclass
class DeleteTargetResponse:
    transaction_id: str
    result_code: str

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "DeleteTargetResponse":
        return cls(
            transaction_id=_str(data, "transaction_id"),
            result_code=_str(data, "result_code"),
        )


@dataclass
class TargetSummaryResponse:
    transaction_id: str
    result_code: str
    status: str
    database_name: str
    target_name: str
    # YYYY-MM-DD
    upload_date: str
    active: bool
    tracking_rating: int
    total_recos: int
    # current/previous month counters are 0 unless status is "success"
    current_month_recos: int
    previous_month_recos: int

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "TargetSummaryResponse":
        return cls(
            transaction_id=_str(data, "transaction_id"),
            result_code=_str(data, "result_code"),
            status=_str(data, "status"),
            database_name=_str(data, "database_name"),
            target_name=_str(data, "target_name"),
            upload_date=_str(data, "upload_date"),
            active=_bool(data, "active_flag"),
            tracking_rating=_int(data, "tracking_rating", UNRATED),
            total_recos=_int(data, "total_recos"),
            current_month_recos=_int(data, "current_month_recos"),
            previous_month_recos=_int(data, "previous_month_recos"),
        )


@dataclass
class DatabaseSummaryResponse:
    transaction_id: str
    result_code: str
    name: str
    # images with status success and active_flag true
    active_images: int
    # images with status success and active_flag false
    inactive_images: int
    failed_images: int

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "DatabaseSummaryResponse":
        return cls(
            transaction_id=_str(data, "transaction_id"),
            result_code=_str(data, "result_code"),
            name=_str(data, "name"),
            active_images=_int(data, "active_images"),
            inactive_images=_int(data, "inactive_images"),
            failed_images=_int(data, "failed_images"),
        )
