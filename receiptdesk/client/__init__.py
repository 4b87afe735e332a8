from .receipts import ClientError, ProfileIncompleteError, ReceiptDeskClient, SessionExpiredError
from .session import SessionContext

__all__ = [
    "ClientError",
    "ProfileIncompleteError",
    "ReceiptDeskClient",
    "SessionContext",
    "SessionExpiredError",
]
