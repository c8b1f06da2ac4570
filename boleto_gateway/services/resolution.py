"""Boleto resolution - decides what to tell a customer and which media to push"""

import logging
import uuid
from datetime import date
from typing import Callable, Optional
from boleto_gateway.domain.exceptions import ERPAPIError, TenantStoreError
from boleto_gateway.domain.interfaces import ERPClient, ERPClientFactory, MessagingClientFactory, TenantStore
from boleto_gateway.domain.models import (
    FinancialRecord,
    ResolutionOutcome,
    Tenant,
    VehicleRef,
    CHANNEL_ACTIVE,
    CHANNEL_BLOCKED,
    DECISION_SETTLED,
    DECISION_DELIVER,
)
from boleto_gateway.domain.policy import (
    evaluate_record,
    inspection_video_url,
    is_vehicle_permitted,
    regularization_template,
    select_governing_record,
    select_payment_code,
    select_payment_link,
)
from boleto_gateway.domain.templates import render_template
from boleto_gateway.domain.window import compute_lookup_window
from boleto_gateway.infrastructure.observability.metrics import erp_failures_counter
from boleto_gateway.services.dispatch import DispatchScheduler, MediaDispatcher
from boleto_gateway.utils.date_utils import format_date_br, today_utc

logger = logging.getLogger(__name__)

TENANT_NOT_FOUND_MESSAGE = "Cliente não encontrado ou inativo."
VEHICLE_NOT_FOUND_MESSAGE = "Veículo não encontrado."


class BoletoResolutionService:
    """
    Resolves one plate + phone request for a tenant.

    Flow:
    1. Load tenant policy (missing or inactive → fixed message)
    2. Compute the due-date window and list boletos for the plate
    3a. Boleto found → classify the earliest one, render, dispatch media
    3b. No boleto → look up the vehicle and send the regularization message

    Every failure ends in a message; nothing is raised to the caller.
    """

    def __init__(
        self,
        tenant_store: TenantStore,
        erp_client_factory: ERPClientFactory,
        messaging_client_factory: MessagingClientFactory,
        scheduler: DispatchScheduler,
        today_provider: Callable[[], date] = today_utc,
    ):
        self.tenant_store = tenant_store
        self.erp_client_factory = erp_client_factory
        self.messaging_client_factory = messaging_client_factory
        self.scheduler = scheduler
        self.today_provider = today_provider

    async def resolve(self, plate: str, phone: str, tenant_id: uuid.UUID) -> ResolutionOutcome:
        try:
            tenant = self.tenant_store.get_tenant(tenant_id)
        except TenantStoreError as e:
            logger.error(f"Tenant store error: {e}", extra={"tenant_id": str(tenant_id)})
            return ResolutionOutcome(
                f"Erro ao carregar configuração do cliente: {e}", CHANNEL_BLOCKED, "tenant_store_error"
            )

        if tenant is None or not tenant.active:
            return ResolutionOutcome(TENANT_NOT_FOUND_MESSAGE, CHANNEL_BLOCKED, "tenant_not_found")

        erp = self.erp_client_factory(tenant)
        today = self.today_provider()
        window_start, window_end = compute_lookup_window(today, tenant.days_before_due, tenant.days_after_due)

        try:
            records = await erp.list_records_by_plate_and_window(plate, window_start, window_end)
        except ERPAPIError as e:
            erp_failures_counter.labels(operation="list_records").inc()
            logger.error(f"SGA boleto lookup failed: {e}", extra={"tenant_id": str(tenant.id), "plate": plate})
            return ResolutionOutcome(f"Erro ao buscar boleto: {e}", CHANNEL_BLOCKED, "erp_error")

        record = select_governing_record(records)
        if record is not None:
            return self._resolve_record(record, phone, tenant, today)

        return await self._resolve_without_record(erp, plate, phone, tenant)

    def _dispatcher(self, tenant: Tenant) -> MediaDispatcher:
        return MediaDispatcher(self.messaging_client_factory(tenant), self.scheduler)

    def _send_inspection_video(self, vehicle: Optional[VehicleRef], phone: str, tenant: Tenant) -> None:
        if not tenant.media_enabled:
            return
        video_url = inspection_video_url(vehicle.fipe_code if vehicle else None, tenant)
        if video_url:
            self._dispatcher(tenant).send_inspection_video(phone, video_url)

    def _resolve_record(self, record: FinancialRecord, phone: str, tenant: Tenant, today: date) -> ResolutionOutcome:
        decision = evaluate_record(record, tenant, today)
        logger.info(
            "Boleto evaluated",
            extra={
                "tenant_id": str(tenant.id),
                "boleto": record.identifier,
                "erp_status": record.erp_status,
                "lifecycle_state": record.lifecycle_state,
                "vehicle_plate": decision.vehicle.plate if decision.vehicle else None,
                "decision": decision.outcome,
                "reason": decision.reason,
                "lag_days": decision.lag_days,
            },
        )

        if decision.outcome == DECISION_SETTLED:
            return ResolutionOutcome(tenant.templates.settled, CHANNEL_BLOCKED, decision.outcome)

        if decision.outcome != DECISION_DELIVER:
            self._send_inspection_video(decision.vehicle, phone, tenant)
            fipe_code = decision.vehicle.fipe_code if decision.vehicle else None
            return ResolutionOutcome(
                regularization_template(fipe_code, tenant.templates), CHANNEL_BLOCKED, decision.outcome
            )

        dispatcher = self._dispatcher(tenant)
        payment_code = select_payment_code(record)
        if payment_code:
            dispatcher.send_payment_code(phone, payment_code)
        payment_link = select_payment_link(record)
        if payment_link:
            dispatcher.send_payment_link(phone, payment_link)

        message = render_template(
            tenant.templates.success,
            {
                "data_vencimento": format_date_br(record.due_date),
                "valor_boleto": record.amount,
            },
        )
        return ResolutionOutcome(message, CHANNEL_ACTIVE, decision.outcome)

    async def _resolve_without_record(
        self, erp: ERPClient, plate: str, phone: str, tenant: Tenant
    ) -> ResolutionOutcome:
        try:
            vehicles = await erp.find_vehicle_by_plate(plate)
        except ERPAPIError as e:
            erp_failures_counter.labels(operation="find_vehicle").inc()
            logger.error(f"SGA vehicle lookup failed: {e}", extra={"tenant_id": str(tenant.id), "plate": plate})
            return ResolutionOutcome(f"Erro ao buscar veículo: {e}", CHANNEL_BLOCKED, "erp_error")

        if not vehicles:
            return ResolutionOutcome(VEHICLE_NOT_FOUND_MESSAGE, CHANNEL_BLOCKED, "vehicle_not_found")

        vehicle = vehicles[0]
        if is_vehicle_permitted(vehicle, tenant):
            self._send_inspection_video(vehicle, phone, tenant)

        return ResolutionOutcome(
            regularization_template(vehicle.fipe_code, tenant.templates), CHANNEL_BLOCKED, "no_boleto"
        )
