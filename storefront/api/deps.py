# storefront/api/deps.py
from fastapi import Depends, Header, HTTPException, status

from storefront.data.backends import create_store
from storefront.data.store import Store
from storefront.domain.errors import (
    DataUnavailable,
    NotFound,
    OrderCreationFailed,
    StorefrontError,
    ValidationError,
    WriteError,
)
from storefront.domain.schemas import CurrentUser
from storefront.services.identity_client import IdentityClient

identity_client = IdentityClient()


def get_current_user(authorization: str | None = Header(None)) -> CurrentUser:
    token = None
    if authorization and authorization.lower().startswith("bearer "):
        token = authorization[7:].strip()

    try:
        user = identity_client.current_user(token)
    except DataUnavailable:
        raise HTTPException(status_code=503, detail="Auth service unavailable")

    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Please sign in",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user


def get_store(user: CurrentUser = Depends(get_current_user)) -> Store:
    return create_store(user.access_token)


def get_public_store() -> Store:
    """Store for anonymous reads (catalog, reviews)."""
    return create_store()


def to_http(e: StorefrontError) -> HTTPException:
    """Single user-facing message per failure kind."""
    if isinstance(e, ValidationError):
        return HTTPException(
            status_code=422,
            detail={"message": str(e), "missing_fields": e.missing_fields},
        )
    if isinstance(e, NotFound):
        return HTTPException(status_code=404, detail=str(e))
    if isinstance(e, DataUnavailable):
        return HTTPException(status_code=503, detail="Data temporarily unavailable, please retry")
    if isinstance(e, OrderCreationFailed):
        return HTTPException(status_code=502, detail="Failed to place your order. Please try again.")
    if isinstance(e, WriteError):
        return HTTPException(status_code=502, detail="Could not save your changes. Please try again.")
    return HTTPException(status_code=500, detail="Unexpected error")
