"""Issuance domain models and collaborator contracts."""
from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True)
class IssuanceOutcome:
    status: str
    tx_hash: str | None = None
    minting_error: str | None = None


@dataclass(frozen=True)
class TicketEmail:
    to: str
    subject: str
    html: str


class MinterProtocol(Protocol):
    async def mint(self, recipients: list[str], token_uri: str) -> str: ...


class NotifierProtocol(Protocol):
    async def send(self, to: str, subject: str, html: str) -> None: ...
