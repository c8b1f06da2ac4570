"""Pydantic schemas for API request/response validation"""

import uuid
from pydantic import BaseModel, Field
from typing import Optional


class WebhookRequest(BaseModel):
    """Request body for POST /api/v1/webhook"""

    placa: str = Field(..., min_length=1, description="Vehicle plate")
    telefone: str = Field(..., min_length=1, description="Customer phone number")
    client_id: Optional[uuid.UUID] = Field(None, description="Tenant id (or X-Client-Id header)")


class WebhookResponse(BaseModel):
    """Response for POST /api/v1/webhook"""

    message: str
