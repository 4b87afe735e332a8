# receiptdesk/client/session.py
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class SessionContext:
    """Signed-in merchant, handed to whatever needs to call the API for them."""

    token: str
    user_id: Optional[int] = None

    @property
    def auth_headers(self) -> dict:
        return {"Authorization": f"Bearer {self.token}"}
