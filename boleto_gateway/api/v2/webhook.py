"""POST /api/v2/webhook - Boleto resolution in the chat provider's payload format"""

from fastapi import APIRouter, Depends, Request

from boleto_gateway.api.v2.schemas import WebhookV2Request, WebhookV2Response
from boleto_gateway.api.v1.webhook import resolve_and_record
from boleto_gateway.api.dependencies import get_request_id, get_resolution_service
from boleto_gateway.domain.normalization import normalize_phone, normalize_plate
from boleto_gateway.services.resolution import BoletoResolutionService

router = APIRouter()


@router.post("/webhook", response_model=WebhookV2Response)
async def receive_webhook_v2(
    request_body: WebhookV2Request,
    request: Request,
    service: BoletoResolutionService = Depends(get_resolution_service),
):
    """Same resolution as v1, plus the channel ("active"/"blocked") for analytics"""
    outcome = await resolve_and_record(
        service,
        normalize_plate(request_body.questions.placa_veiculo.answer),
        normalize_phone(request_body.contact.phonenumber),
        request_body.metadata.chave_integracao,
        get_request_id(request),
    )
    return WebhookV2Response(message=outcome.message, response=outcome.channel)
