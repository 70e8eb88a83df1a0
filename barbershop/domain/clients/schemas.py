"""Client domain schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator

from ...schemas import CamelModel


class ClientCreate(CamelModel):
    """Schema for creating a new client"""

    name: str = Field(min_length=1)
    phone: str = ""
    notes: str = ""

    @field_validator("name")
    @classmethod
    def strip_name(cls, v):
        v = v.strip()
        if not v:
            raise ValueError("Client name is required")
        return v


class ClientUpdate(CamelModel):
    """Schema for updating an existing client"""

    name: Optional[str] = None
    phone: Optional[str] = None
    notes: Optional[str] = None

    @field_validator("name")
    @classmethod
    def strip_name(cls, v):
        if v is None:
            return v
        v = v.strip()
        if not v:
            raise ValueError("Client name cannot be empty")
        return v


class ClientResponse(CamelModel):
    """Schema for client response"""

    id: str
    name: str
    phone: str = ""
    notes: str = ""
    total_appointments: int = 0
    last_visit: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
