"""
storefront/schemas/principal.py
Roles and the request-scoped Principal model.
"""
from typing import Literal, Optional
from pydantic import BaseModel, Field

Role = Literal["guest", "user", "admin"]

class Principal(BaseModel):
    uid: str = Field(..., description="Firebase UID")
    role: Role = Field(..., description="guest | user | admin")
    email: Optional[str] = Field(None, description="Email (if any)")
    display_name: Optional[str] = Field(None, description="Display name (if any)")

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"
