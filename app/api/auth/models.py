"""
Auth models.
Owns: Authenticated identity structures.
"""

from pydantic import BaseModel, ConfigDict


class AuthenticatedUser(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
