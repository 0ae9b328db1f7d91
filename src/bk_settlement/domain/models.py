"""Settlement domain models."""
from dataclasses import dataclass


@dataclass(frozen=True)
class ReconcileResult:
    order_status: str
    updated: bool
    minting_error: str | None = None
