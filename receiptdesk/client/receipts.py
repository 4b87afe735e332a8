"""HTTP client for the merchant-facing receipt flows.

It does what the receipt pages do: read the profile, refuse to start a
receipt while the profile is incomplete, fetch the next receipt number,
submit validated drafts and load the receipt list for filtering.
"""

from __future__ import annotations

from typing import Any, Mapping

import httpx

from receiptdesk.core.logging import get_logger
from receiptdesk.domain.receipts.filters import ReceiptSummary, load_receipts
from receiptdesk.domain.receipts.service import ReceiptDraftEditor

from .session import SessionContext

logger = get_logger(__name__)


class ClientError(RuntimeError):
    """Raised when the API answers with an error status."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class SessionExpiredError(ClientError):
    """Raised on 401; the caller should sign in again."""


class ProfileIncompleteError(ClientError):
    """Raised when a receipt is started before the store profile is filled in."""


class ReceiptDeskClient:
    """Typed wrapper around the receiptdesk HTTP API for one signed-in session."""

    def __init__(
        self,
        base_url: str,
        session: SessionContext,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: float = 20.0,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._session = session
        self._transport = transport
        self._timeout = timeout

    @property
    def session(self) -> SessionContext:
        return self._session

    async def fetch_profile(self) -> dict[str, Any]:
        return await self._request("GET", "/api/profile")

    async def next_receipt_number(self) -> str:
        data = await self._request("GET", "/api/receipts/next-number")
        return str(data["receiptNumber"])

    async def start_draft(self) -> ReceiptDraftEditor:
        profile = await self.fetch_profile()
        if not profile.get("isProfileComplete"):
            raise ProfileIncompleteError("Complete your store profile before creating receipts")
        receipt_number = await self.next_receipt_number()
        logger.debug("starting receipt draft %s", receipt_number)
        return ReceiptDraftEditor(receipt_number=receipt_number)

    async def submit_draft(
        self,
        editor: ReceiptDraftEditor,
        payment_details: Mapping[str, Any] | None = None,
    ) -> Any:
        """Validate the draft and create the receipt; returns the new receipt id.

        Raises ReceiptValidationError before any request when the draft is invalid.
        """
        body = editor.submission(payment_details)
        data = await self._request("POST", "/api/receipts", json=body)
        logger.info("receipt created: receipt_number=%s id=%s", body["receiptNumber"], data.get("receiptId"))
        return data.get("receiptId")

    async def list_receipts(self) -> list[ReceiptSummary]:
        data = await self._request("GET", "/api/viewreceipts")
        return load_receipts(data or [])

    async def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        async with httpx.AsyncClient(
            base_url=self._base_url,
            headers=self._session.auth_headers,
            transport=self._transport,
            timeout=self._timeout,
        ) as client:
            response = await client.request(method, path, **kwargs)

        if response.status_code == 401:
            raise SessionExpiredError(self._extract_error_message(response, "Session expired"), 401)
        if response.status_code >= 400:
            message = self._extract_error_message(response, f"Request to {path} failed")
            logger.warning("%s %s -> %s: %s", method, path, response.status_code, message)
            raise ClientError(message, response.status_code)
        return response.json()

    @staticmethod
    def _extract_error_message(response: httpx.Response, default: str) -> str:
        try:
            body = response.json()
        except ValueError:
            return default
        if isinstance(body, dict) and body.get("error"):
            return str(body["error"])
        return default
