from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import SecretStr


# auto_error=False: a missing header must reach the admin gate and become 401
admin_bearer = HTTPBearer(auto_error=False)


async def get_admin_credential(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(admin_bearer),
) -> Optional[SecretStr]:
    """`Authorization: Bearer <ADMIN_SECRET>` -> credential handed to the admin gate"""
    if credentials is None:
        return None
    return SecretStr(credentials.credentials)
