"""Unified error codes and custom exceptions.

Error code ranges:
  3xxx: Market
  9xxx: System (ledger transport, local store)
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


# --- 3xxx: Market ---

class MarketNotFoundError(AppError):
    def __init__(self, market_id: str) -> None:
        super().__init__(3001, f"Market not found: {market_id}", 404)


class MarketAlreadyExistsError(AppError):
    def __init__(self, market_id: str) -> None:
        super().__init__(
            3003,
            f"Market already exists: {market_id}. Only total_amount can be updated.",
            400,
        )


# --- 9xxx: System ---

class InternalError(AppError):
    def __init__(self, detail: str = "Internal server error") -> None:
        super().__init__(9002, detail, 500)


class LedgerTransportError(AppError):
    """On-chain snapshot could not be fetched or decoded. Nothing was written."""

    def __init__(self, detail: str) -> None:
        super().__init__(9003, f"Ledger fetch failed: {detail}", 502)


class LocalStoreError(AppError):
    """Local read/write failed. The transaction was rolled back."""

    def __init__(self, detail: str) -> None:
        super().__init__(9004, f"Local store error: {detail}", 500)
