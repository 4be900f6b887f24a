"""FastAPI dependency: get_current_account.

Callers are opaque account identifiers carried in the ``X-Account-Id`` header.
Identity is not verified here; the engine only compares accounts for equality.

Usage in any router:
    from src.pm_gateway.auth.dependencies import get_current_account

    @router.post("/markets")
    async def create(account: str = Depends(get_current_account)):
        ...
"""

from fastapi import Header, HTTPException, status

ACCOUNT_HEADER = "X-Account-Id"
_MAX_ACCOUNT_LEN = 128

_MISSING_ACCOUNT_EXCEPTION = HTTPException(
    status_code=status.HTTP_401_UNAUTHORIZED,
    detail=f"Missing or malformed {ACCOUNT_HEADER} header",
)


async def get_current_account(
    x_account_id: str | None = Header(default=None, alias=ACCOUNT_HEADER),
) -> str:
    """Return the caller's account id. Raises HTTP 401 if absent or blank."""
    if x_account_id is None:
        raise _MISSING_ACCOUNT_EXCEPTION
    account = x_account_id.strip()
    if not account or len(account) > _MAX_ACCOUNT_LEN:
        raise _MISSING_ACCOUNT_EXCEPTION
    return account
