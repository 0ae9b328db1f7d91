"""E-ticket e-mail rendering. Pure: same order and hash, same message."""
from html import escape
from urllib.parse import quote

from src.bk_issuance.domain.models import TicketEmail
from src.bk_order.domain.models import Order

# Shown instead of a hash when minting was skipped or failed.
HASH_PLACEHOLDER = "PENDING/FAILED"

_QR_ENDPOINT = "https://api.qrserver.com/v1/create-qr-code/?size=150x150&data="

_ROW = (
    '<tr><td style="color: #64748b; font-size: 12px;">{label}</td>'
    '<td style="font-weight: bold; text-align: right;{extra}">{value}</td></tr>'
)


def _row(label: str, value: str, extra: str = "") -> str:
    return _ROW.format(label=label, value=escape(value), extra=extra)


def render_ticket_email(order: Order, tx_hash: str | None) -> TicketEmail:
    shown_hash = tx_hash or HASH_PLACEHOLDER
    qr_data = quote(tx_hash or "VALID", safe="")
    rows = "".join(
        [
            _row("Route", order.route_label),
            _row("Operator", order.operator),
            _row("Schedule", f"{order.travel_date} | {order.departure_time} WIB"),
            _row("Seat", f"No. {order.seat_number}", " color: #E11D48;"),
            _row("Ticket hash", shown_hash, " font-size: 10px;"),
        ]
    )
    html = f"""
<div style="font-family: sans-serif; max-width: 600px; margin: auto; border: 1px solid #e0e0e0; border-radius: 10px; overflow: hidden;">
  <div style="background: #1E3A8A; padding: 20px; text-align: center; color: white;">
    <h2 style="margin: 0;">NaikAjaa</h2>
    <p style="margin: 5px 0 0; font-size: 14px;">Your travel e-ticket</p>
  </div>
  <div style="padding: 20px;">
    <p>Hello <b>{escape(order.passenger_name)}</b>,</p>
    <p>Payment received. Your ticket details:</p>
    <div style="background: #f8fafc; padding: 15px; border-radius: 8px; margin: 20px 0;">
      <table style="width: 100%;">{rows}</table>
    </div>
    <div style="text-align: center; margin: 30px 0;">
      <img src="{_QR_ENDPOINT}{qr_data}" alt="ticket QR code" />
      <p style="font-size: 12px; color: #94a3b8; margin-top: 10px;">Show this QR code when boarding</p>
    </div>
  </div>
</div>
"""
    return TicketEmail(
        to=order.email,
        subject=f"E-Ticket issued: {order.order_ref}",
        html=html,
    )
