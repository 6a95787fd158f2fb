"""Client for the VWS target management API."""

from __future__ import annotations

import json
import logging
from typing import Any, Callable, Dict, Optional, Protocol, TypeVar

import requests

from vws.errors import ApiError, PreconditionError, ServerError
from vws.models import (
    DatabaseSummaryResponse,
    DeleteTargetRequest,
    DeleteTargetResponse,
    GetTargetRequest,
    GetTargetResponse,
    PostTargetRequest,
    PostTargetResponse,
    TargetSummaryRequest,
    TargetSummaryResponse,
    UpdateTargetRequest,
    UpdateTargetResponse,
)
from vws.signer import RequestSigner

VWS_HOST = "vws.vuforia.com"

T = TypeVar("T")


class Client(Protocol):
    """Operations offered by the VWS target API."""

    def post_target(self, request: PostTargetRequest) -> PostTargetResponse:
        ...

    def get_target(self, request: GetTargetRequest) -> GetTargetResponse:
        ...

    def update_target(self, request: UpdateTargetRequest) -> UpdateTargetResponse:
        ...

    def delete_target(self, request: DeleteTargetRequest) -> DeleteTargetResponse:
        ...

    def target_summary(self, request: TargetSummaryRequest) -> TargetSummaryResponse:
        ...

    def database_summary(self) -> DatabaseSummaryResponse:
        ...


def _require_request(request: Any) -> None:
    # None is a programming error, not something the caller can recover from.
    if request is None:
        raise TypeError("request must not be None")


def require_target_id(target_id: str) -> str:
    if not target_id or not target_id.strip():
        raise PreconditionError("target_id must be provided")
    return target_id


class VwsClient:
    """Blocking VWS client.

    Every call sends exactly one signed request; nothing is retried here.
    Passing ``None`` instead of a request object raises ``TypeError``.
    """

    def __init__(
        self,
        access_key: str,
        secret_key: str,
        session: Optional[requests.Session] = None,
        timeout: float = 30.0,
        host: str = VWS_HOST,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        if not secret_key:
            raise PreconditionError("vuforia secret key must be set")
        if not access_key:
            raise PreconditionError("vuforia access key must be set")
        self._signer = RequestSigner(access_key, secret_key)
        self._owns_session = session is None
        self._session = session or requests.Session()
        self._timeout = timeout
        self._base_url = f"https://{host}"
        self._logger = logger or logging.getLogger(__name__)

    def close(self) -> None:
        """Close the session if this client created it."""
        if self._owns_session:
            self._session.close()

    def __enter__(self) -> "VwsClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def post_target(self, request: PostTargetRequest) -> PostTargetResponse:
        _require_request(request)
        return self._call(
            "POST", "/targets", PostTargetResponse.from_dict, request.to_payload()
        )

    def get_target(self, request: GetTargetRequest) -> GetTargetResponse:
        """Retrieve a target record including its status and tracking rating."""
        _require_request(request)
        target_id = require_target_id(request.target_id)
        return self._call("GET", f"/targets/{target_id}", GetTargetResponse.from_dict)

    def update_target(self, request: UpdateTargetRequest) -> UpdateTargetResponse:
        """Update only the fields of ``request`` that are not ``None``."""
        _require_request(request)
        target_id = require_target_id(request.target_id)
        return self._call(
            "PUT",
            f"/targets/{target_id}",
            UpdateTargetResponse.from_dict,
            request.to_payload(),
        )

    def delete_target(self, request: DeleteTargetRequest) -> DeleteTargetResponse:
        _require_request(request)
        target_id = require_target_id(request.target_id)
        return self._call(
            "DELETE", f"/targets/{target_id}", DeleteTargetResponse.from_dict
        )

    def target_summary(self, request: TargetSummaryRequest) -> TargetSummaryResponse:
        _require_request(request)
        target_id = require_target_id(request.target_id)
        return self._call(
            "GET", f"/summary/{target_id}", TargetSummaryResponse.from_dict
        )

    def database_summary(self) -> DatabaseSummaryResponse:
        return self._call("GET", "/summary", DatabaseSummaryResponse.from_dict)

    def _call(
        self,
        method: str,
        path: str,
        decode: Callable[[Dict[str, Any]], T],
        payload: Optional[Dict[str, Any]] = None,
    ) -> T:
        body = None if payload is None else json.dumps(payload).encode("utf-8")
        prepared = self._session.prepare_request(
            requests.Request(method, f"{self._base_url}{path}", data=body)
        )
        self._signer.prepare(prepared)

        response = self._session.send(prepared, timeout=self._timeout)
        try:
            # Read the whole body so the connection can go back to the pool.
            response.content
        finally:
            response.close()

        self._logger.debug(
            "VWS_REQUEST method=%s path=%s status=%s",
            method,
            path,
            response.status_code,
        )
        if response.status_code >= 500:
            raise ServerError(response.status_code)
        data = response.json()
        if not isinstance(data, dict):
            if not 400 <= response.status_code < 500:
                raise ValueError(
                    f"expected a JSON object from {method} {path}, "
                    f"got {type(data).__name__}"
                )
            # Error pages from proxies are not VWS envelopes.
            data = {}
        if 400 <= response.status_code < 500:
            error = ApiError(
                str(data.get("result_code", "")),
                str(data.get("transaction_id", "")),
                response.status_code,
            )
            self._logger.debug(
                "VWS_REQUEST failed result_code=%s transaction_id=%s",
                error.result_code,
                error.transaction_id,
            )
            raise error
        return decode(data)
