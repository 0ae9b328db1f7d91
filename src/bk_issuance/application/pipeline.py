"""TicketIssuancePipeline — mint the ticket token and e-mail the e-ticket.

Runs once per order, right after the order's transition into LUNAS has been
committed. Only the writer that won that transition calls issue(), and the
outcome is recorded with ``WHERE status = 'LUNAS' AND tx_hash IS NULL``, so a
second caller could never overwrite it anyway.

Mint failures are contained: the order ends in LUNAS_MINT_FAILED with the
sentinel hash and the caller gets an outcome, not an exception. The e-mail is
sent from a detached task; its result is visible in the log only.
"""
import logging

from sqlalchemy.ext.asyncio import AsyncSession

from config.settings import settings
from src.bk_common.background import spawn_detached
from src.bk_common.enums import OrderStatus
from src.bk_common.errors import NotificationError
from src.bk_identity.domain.repository import IdentityRepositoryProtocol
from src.bk_identity.infrastructure.persistence import IdentityRepository
from src.bk_issuance.application.service import get_minting_client, get_notifier
from src.bk_issuance.domain.models import (
    IssuanceOutcome,
    MinterProtocol,
    NotifierProtocol,
    TicketEmail,
)
from src.bk_issuance.domain.ticket_email import render_ticket_email
from src.bk_order.domain.metadata import metadata_uri
from src.bk_order.domain.models import MINT_FAILED_SENTINEL, Order
from src.bk_order.domain.repository import OrderRepositoryProtocol
from src.bk_order.infrastructure.persistence import OrderRepository

logger = logging.getLogger(__name__)

MISSING_WALLET_ERROR = "Recipient wallet address not found"


class TicketIssuancePipeline:
    def __init__(
        self,
        orders: OrderRepositoryProtocol | None = None,
        identities: IdentityRepositoryProtocol | None = None,
        minter: MinterProtocol | None = None,
        notifier: NotifierProtocol | None = None,
        public_base_url: str | None = None,
    ) -> None:
        self._orders: OrderRepositoryProtocol = orders or OrderRepository()
        self._identities: IdentityRepositoryProtocol = identities or IdentityRepository()
        self._minter = minter
        self._notifier = notifier
        self._public_base_url = public_base_url or settings.PUBLIC_BASE_URL

    @property
    def minter(self) -> MinterProtocol:
        return self._minter or get_minting_client()

    @property
    def notifier(self) -> NotifierProtocol:
        return self._notifier or get_notifier()

    async def issue(self, db: AsyncSession, order: Order) -> IssuanceOutcome:
        outcome = await self._mint(db, order)
        minted_hash = outcome.tx_hash if outcome.status == OrderStatus.MINTED.value else None
        self._dispatch_email(render_ticket_email(order, minted_hash))
        return outcome

    async def _mint(self, db: AsyncSession, order: Order) -> IssuanceOutcome:
        identity = await self._identities.find_by_email(db, order.email)
        if identity is None or not identity.can_receive_tickets:
            logger.error(
                "No wallet address for %s, minting skipped for %s",
                order.email,
                order.order_ref,
            )
            return IssuanceOutcome(
                status=OrderStatus.LUNAS.value, minting_error=MISSING_WALLET_ERROR
            )

        token_uri = metadata_uri(self._public_base_url, order.order_ref)
        minting_error: str | None = None
        try:
            tx_hash = await self.minter.mint([identity.wallet_address], token_uri)
            target = OrderStatus.MINTED
        except Exception as exc:
            logger.error("Minting failed for %s: %s", order.order_ref, exc)
            tx_hash = MINT_FAILED_SENTINEL
            target = OrderStatus.LUNAS_MINT_FAILED
            minting_error = str(exc) or type(exc).__name__

        try:
            recorded = await self._orders.record_issuance(
                db, order.order_ref, target.value, tx_hash
            )
            await db.commit()
        except Exception:
            await db.rollback()
            raise

        if recorded is None:
            # Nothing written; report what is stored, or the order as passed in.
            current = await self._orders.get_by_ref(db, order.order_ref)
            stored = current if current is not None else order
            logger.warning(
                "Issuance for %s not recorded, order is %s", order.order_ref, stored.status
            )
            return IssuanceOutcome(
                status=stored.status,
                tx_hash=stored.tx_hash,
                minting_error=minting_error,
            )

        logger.info("Order %s issuance recorded: %s %s", order.order_ref, target.value, tx_hash)
        return IssuanceOutcome(status=target.value, tx_hash=tx_hash, minting_error=minting_error)

    def _dispatch_email(self, email: TicketEmail) -> None:
        spawn_detached(self._send(email), name=f"ticket-email:{email.to}")

    async def _send(self, email: TicketEmail) -> None:
        try:
            await self.notifier.send(email.to, email.subject, email.html)
        except NotificationError as exc:
            logger.error("E-ticket to %s not delivered: %s", email.to, exc.message)
