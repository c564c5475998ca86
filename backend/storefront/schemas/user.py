# storefront/schemas/user.py
from datetime import datetime
from typing import Optional

from pydantic import EmailStr, Field

from storefront.schemas.common import CamelModel


class CustomerProfile(CamelModel):
    id: str
    name: Optional[str] = ""
    email: Optional[str] = ""
    created_at: Optional[datetime] = None


class CustomerProfileUpdate(CamelModel):
    name: str = Field(..., min_length=1, max_length=120)
    email: Optional[EmailStr] = None
