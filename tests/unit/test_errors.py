"""Unit tests for the AppError hierarchy."""
import pytest

from src.pm_common.errors import (
    AlreadySettledError,
    AmountTooSmallError,
    AppError,
    ArrayLengthMismatchError,
    InsufficientBalanceError,
    InsufficientFeeError,
    InsufficientPaymentError,
    InsufficientPoolSupplyError,
    InsufficientSharesError,
    InvalidPriceError,
    InvalidShareAmountError,
    MarketClosedError,
    MarketNotFoundError,
    NoWinningSharesError,
    NotAuthorizedError,
    NotOwnerError,
    NotSettledError,
    OnlyWinnersCanSellAfterSettlementError,
    TooEarlyError,
)


@pytest.mark.parametrize(
    "error, code, status",
    [
        (InvalidShareAmountError(), 1001, 422),
        (InvalidPriceError(0), 1002, 422),
        (ArrayLengthMismatchError(2, 3), 1003, 422),
        (NotOwnerError("eve"), 2001, 403),
        (NotAuthorizedError("bot"), 2002, 403),
        (MarketNotFoundError(9), 3001, 404),
        (AlreadySettledError(1), 3002, 409),
        (NotSettledError(1), 3003, 422),
        (TooEarlyError(1, 86400), 3004, 422),
        (MarketClosedError(1), 3005, 422),
        (OnlyWinnersCanSellAfterSettlementError(1), 3006, 422),
        (InsufficientFeeError(10, 1), 4001, 422),
        (InsufficientPaymentError(10, 1), 4002, 422),
        (InsufficientSharesError(10, 1), 4003, 422),
        (InsufficientPoolSupplyError(10, 1), 4004, 422),
        (NoWinningSharesError(), 4005, 422),
        (AmountTooSmallError(), 4007, 422),
        (InsufficientBalanceError("NATIVE", 10, 1), 5001, 422),
    ],
)
def test_codes_and_statuses(error: AppError, code: int, status: int) -> None:
    assert isinstance(error, AppError)
    assert error.code == code
    assert error.http_status == status


def test_code_ranges_group_by_category() -> None:
    assert 1000 <= InvalidPriceError(0).code < 2000
    assert 2000 <= NotOwnerError("x").code < 3000
    assert 3000 <= AlreadySettledError(1).code < 4000
    assert 4000 <= AmountTooSmallError().code < 5000


def test_message_carries_context() -> None:
    err = ArrayLengthMismatchError(2, 3)
    assert "2" in err.message and "3" in err.message
    assert str(err) == err.message
