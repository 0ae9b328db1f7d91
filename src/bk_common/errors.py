"""Unified error codes and custom exceptions.

Error code ranges:
  1xxx: Identity/User
  2xxx: Route catalog / Seat
  3xxx: Fare / Promo
  4xxx: Order
  5xxx: Payment gateway
  6xxx: Ticket issuance (contained, never surfaced as request failures)
  9xxx: System
"""


class AppError(Exception):
    """Base application error."""

    def __init__(
        self,
        code: int,
        message: str,
        http_status: int = 500,
    ) -> None:
        self.code = code
        self.message = message
        self.http_status = http_status
        super().__init__(message)


# --- 1xxx: Identity/User ---

class UserNotFoundError(AppError):
    def __init__(self, email: str) -> None:
        super().__init__(1001, f"User not found: {email}", 404)


# --- 2xxx: Route / Seat ---

class RouteNotFoundError(AppError):
    def __init__(self, route_id: int | str) -> None:
        super().__init__(2001, f"Route not found: {route_id}", 404)


class SeatConflictError(AppError):
    def __init__(self, seat_number: str) -> None:
        super().__init__(2002, f"Seat {seat_number} is already booked", 409)


# --- 3xxx: Fare / Promo ---

class InvalidAmountError(AppError):
    def __init__(self, amount: int, minimum: int) -> None:
        super().__init__(
            3001,
            f"Invalid charge amount: {amount} (minimum {minimum})",
            422,
        )


# --- 4xxx: Order ---

class OrderNotFoundError(AppError):
    def __init__(self, order_ref: str) -> None:
        super().__init__(4001, f"Order not found: {order_ref}", 404)


# --- 5xxx: Payment gateway ---

class GatewayError(AppError):
    def __init__(self, detail: str) -> None:
        super().__init__(5001, f"Payment gateway error: {detail}", 502)


class GatewayTimeoutError(AppError):
    def __init__(self, operation: str) -> None:
        super().__init__(5002, f"Payment gateway timed out during {operation}", 504)


# --- 6xxx: Issuance ---

class MintingError(AppError):
    def __init__(self, detail: str) -> None:
        super().__init__(6001, f"Minting failed: {detail}", 502)


class NotificationError(AppError):
    def __init__(self, detail: str) -> None:
        super().__init__(6002, f"Notification failed: {detail}", 502)


# --- 9xxx: System ---

class DatabaseUnavailableError(AppError):
    def __init__(self, detail: str = "Database unavailable") -> None:
        super().__init__(9001, detail, 503)


class InternalError(AppError):
    def __init__(self, detail: str = "Internal server error") -> None:
        super().__init__(9002, detail, 500)
