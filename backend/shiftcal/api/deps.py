# ruff: noqa: B008, TC003
from __future__ import annotations

import uuid
from typing import Annotated

from fastapi import Depends, Header
from pydantic import BaseModel

USER_ID_HEADER = "X-User-Id"


class AuthContext(BaseModel):
    """Caller identity taken from the development ``X-User-Id`` header.

    Every schedule, profile and report is scoped to this user.
    """

    user_id: uuid.UUID


async def get_auth_context(
    x_user_id: uuid.UUID = Header(alias=USER_ID_HEADER),
) -> AuthContext:
    return AuthContext(user_id=x_user_id)


AuthDep = Annotated[AuthContext, Depends(get_auth_context)]
