"""Pydantic schemas for the chat provider webhook format"""

import uuid
from pydantic import BaseModel, Field
from typing import Literal


class IntegrationMetadata(BaseModel):
    chave_integracao: uuid.UUID


class QuestionAnswer(BaseModel):
    answer: str = Field(..., min_length=1)


class WebhookQuestions(BaseModel):
    placa_veiculo: QuestionAnswer


class WebhookContact(BaseModel):
    phonenumber: str = Field(..., min_length=1)


class WebhookV2Request(BaseModel):
    """Request body for POST /api/v2/webhook"""

    metadata: IntegrationMetadata
    questions: WebhookQuestions
    contact: WebhookContact


class WebhookV2Response(BaseModel):
    """Response for POST /api/v2/webhook"""

    message: str
    response: Literal["active", "blocked"]
