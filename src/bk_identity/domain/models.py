"""Identity domain model — the account an order's e-mail belongs to."""
from dataclasses import dataclass


@dataclass(frozen=True)
class Identity:
    email: str
    name: str
    wallet_address: str | None = None
    role: str = "user"

    @property
    def can_receive_tickets(self) -> bool:
        return bool(self.wallet_address)
