"""POST /api/v1/webhook - Boleto resolution for plate + phone"""

import time
import uuid
from typing import Optional
from fastapi import APIRouter, Depends, Header, Request
from fastapi.responses import JSONResponse

from boleto_gateway.api.v1.schemas import WebhookRequest, WebhookResponse
from boleto_gateway.api.dependencies import get_request_id, get_resolution_service
from boleto_gateway.domain.models import ResolutionOutcome
from boleto_gateway.domain.normalization import normalize_phone, normalize_plate
from boleto_gateway.services.resolution import BoletoResolutionService
from boleto_gateway.infrastructure.observability.metrics import record_resolution
from boleto_gateway.infrastructure.observability.logging import log_resolution

router = APIRouter()

MISSING_CLIENT_ID_ERROR = "client_id é obrigatório (body ou header X-Client-Id)"
INVALID_CLIENT_ID_ERROR = "client_id deve ser um UUID válido"


async def resolve_and_record(
    service: BoletoResolutionService,
    plate: str,
    phone: str,
    tenant_id: uuid.UUID,
    request_id: str,
) -> ResolutionOutcome:
    """Run one resolution and record its metrics and structured log"""
    start_time = time.time()

    outcome = await service.resolve(plate, phone, tenant_id)

    duration_ms = (time.time() - start_time) * 1000
    record_resolution(outcome.kind, outcome.channel)
    log_resolution(request_id, str(tenant_id), plate, outcome.kind, outcome.channel, duration_ms)
    return outcome


@router.post("/webhook", response_model=WebhookResponse)
async def receive_webhook(
    request_body: WebhookRequest,
    request: Request,
    x_client_id: Optional[str] = Header(None, alias="X-Client-Id"),
    service: BoletoResolutionService = Depends(get_resolution_service),
):
    """
    Resolve the customer's boleto and answer with the message to show.

    The tenant comes from `client_id` in the body or the X-Client-Id header;
    the body wins when both are present.
    """
    tenant_id = request_body.client_id
    if tenant_id is None:
        if not x_client_id:
            return JSONResponse(status_code=400, content={"error": MISSING_CLIENT_ID_ERROR})
        try:
            tenant_id = uuid.UUID(x_client_id)
        except ValueError:
            return JSONResponse(status_code=422, content={"error": INVALID_CLIENT_ID_ERROR})

    outcome = await resolve_and_record(
        service,
        normalize_plate(request_body.placa),
        normalize_phone(request_body.telefone),
        tenant_id,
        get_request_id(request),
    )
    return WebhookResponse(message=outcome.message)
