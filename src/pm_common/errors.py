"""Unified error codes and custom exceptions.

Error code ranges:
  1xxx: Validation
  2xxx: Authorization
  3xxx: Market state
  4xxx: Resource (payments, shares, pools)
  5xxx: Balance ledger
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


# --- 1xxx: Validation ---

class InvalidShareAmountError(AppError):
    def __init__(self) -> None:
        super().__init__(1001, "Share amount must be greater than zero", 422)


class InvalidPriceError(AppError):
    def __init__(self, price: int) -> None:
        super().__init__(1002, f"Initial price must be positive, got {price}", 422)


class ArrayLengthMismatchError(AppError):
    def __init__(self, ids_len: int, prices_len: int) -> None:
        super().__init__(
            1003,
            f"Array length mismatch: {ids_len} market ids, {prices_len} final prices",
            422,
        )


class InvalidAmountError(AppError):
    def __init__(self) -> None:
        super().__init__(1004, "Amount must be greater than zero", 422)


# --- 2xxx: Authorization ---

class NotOwnerError(AppError):
    def __init__(self, account: str) -> None:
        super().__init__(2001, f"Caller is not the owner: {account}", 403)


class NotAuthorizedError(AppError):
    def __init__(self, account: str) -> None:
        super().__init__(2002, f"Caller is not authorized to settle: {account}", 403)


# --- 3xxx: Market state ---

class MarketNotFoundError(AppError):
    def __init__(self, market_id: int) -> None:
        super().__init__(3001, f"Market not found: {market_id}", 404)


class AlreadySettledError(AppError):
    def __init__(self, market_id: int) -> None:
        super().__init__(3002, f"Market already settled: {market_id}", 409)


class NotSettledError(AppError):
    def __init__(self, market_id: int) -> None:
        super().__init__(3003, f"Market not settled: {market_id}", 422)


class TooEarlyError(AppError):
    def __init__(self, market_id: int, settlement_time: int) -> None:
        super().__init__(
            3004,
            f"Market {market_id} cannot be settled before {settlement_time}",
            422,
        )


class MarketClosedError(AppError):
    def __init__(self, market_id: int) -> None:
        super().__init__(3005, f"Market is closed for trading: {market_id}", 422)


class OnlyWinnersCanSellAfterSettlementError(AppError):
    def __init__(self, market_id: int) -> None:
        super().__init__(
            3006, f"Only the winning outcome can be sold after settlement: {market_id}", 422
        )


class ProtocolTokenNotSetError(AppError):
    def __init__(self) -> None:
        super().__init__(3007, "Protocol token is not set", 422)


class ProtocolTokenAlreadySetError(AppError):
    def __init__(self) -> None:
        super().__init__(3008, "Protocol token is already set", 409)


# --- 4xxx: Resource ---

class InsufficientFeeError(AppError):
    def __init__(self, required: int, provided: int) -> None:
        super().__init__(
            4001, f"Insufficient creation fee: required {required}, provided {provided}", 422
        )


class InsufficientPaymentError(AppError):
    def __init__(self, required: int, provided: int) -> None:
        super().__init__(
            4002, f"Insufficient payment: required {required}, provided {provided}", 422
        )


class InsufficientSharesError(AppError):
    def __init__(self, required: int, available: int) -> None:
        super().__init__(
            4003, f"Insufficient shares: required {required}, available {available}", 422
        )


class InsufficientPoolSupplyError(AppError):
    def __init__(self, requested: int, supply: int) -> None:
        super().__init__(
            4004, f"Insufficient pool supply: requested {requested}, supply {supply}", 422
        )


class NoWinningSharesError(AppError):
    def __init__(self) -> None:
        super().__init__(4005, "Caller holds no winning shares", 422)


class NoWinningSharesExistError(AppError):
    def __init__(self, market_id: int) -> None:
        super().__init__(4006, f"No winning shares exist for market {market_id}", 422)


class AmountTooSmallError(AppError):
    def __init__(self) -> None:
        super().__init__(4007, "Redeemed amount rounds to zero", 422)


class InsufficientRewardBalanceError(AppError):
    def __init__(self, required: int, available: int) -> None:
        super().__init__(
            4008,
            f"Insufficient reward balance: required {required}, available {available}",
            422,
        )


class NoRewardSharesIssuedError(AppError):
    def __init__(self) -> None:
        super().__init__(4009, "No reward shares have been issued", 422)


class EmptyRedemptionPoolError(AppError):
    def __init__(self) -> None:
        super().__init__(4010, "Protocol token pool is empty", 422)


class InsufficientLiquidityError(AppError):
    def __init__(self, required: int, available: int) -> None:
        super().__init__(
            4011,
            f"Escrow cannot cover payout: required {required}, available {available}",
            422,
        )


# --- 5xxx: Balance ledger ---

class InsufficientBalanceError(AppError):
    def __init__(self, ledger_id: str, required: int, available: int) -> None:
        super().__init__(
            5001,
            f"Insufficient balance in {ledger_id}: required {required}, available {available}",
            422,
        )


class LedgerNotFoundError(AppError):
    def __init__(self, ledger_id: str) -> None:
        super().__init__(5002, f"Ledger not found: {ledger_id}", 404)


# --- 9xxx: System ---

class InternalError(AppError):
    def __init__(self, detail: str = "Internal server error") -> None:
        super().__init__(9002, detail, 500)
