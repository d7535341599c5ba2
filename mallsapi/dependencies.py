"""
Malls API Backend — Authorization Gate
========================================

What:  FastAPI dependencies guarding the write routes.
How:   The token travels in the `x-auth-token` header. get_current_identity
       verifies it and returns a TokenIdentity; require_admin builds on it.
       Because require_admin depends on get_current_identity, a missing
       token fails with 401 before the admin check runs.

Usage:
    @router.post("")
    async def create(..., identity: TokenIdentity = Depends(get_current_identity)): ...

    @router.delete("/{id}", dependencies=[Depends(require_admin)])
    async def delete(...): ...
"""

from typing import Optional

from fastapi import Depends
from fastapi.security import APIKeyHeader

from mallsapi.exceptions import AuthenticationError, ForbiddenError
from mallsapi.security import TokenIdentity, decode_access_token

TOKEN_HEADER = "x-auth-token"

# auto_error=False so a missing header reaches our own 401 message
token_header = APIKeyHeader(name=TOKEN_HEADER, auto_error=False)


async def get_current_identity(
    token: Optional[str] = Depends(token_header),
) -> TokenIdentity:
    if not token:
        raise AuthenticationError()
    return decode_access_token(token)


async def require_admin(
    identity: TokenIdentity = Depends(get_current_identity),
) -> TokenIdentity:
    if not identity.is_admin:
        raise ForbiddenError()
    return identity
