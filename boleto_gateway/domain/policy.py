"""Boleto policy engine - record selection, status classification and delivery policy"""

from datetime import date
from typing import Iterable, List, Optional
from boleto_gateway.domain.models import (
    FinancialRecord,
    RecordDecision,
    ResponseTemplates,
    Tenant,
    VehicleRef,
    SETTLED,
    OPEN,
    OTHER,
    DECISION_SETTLED,
    DECISION_REGULARIZATION,
    DECISION_DELIVER,
)
from boleto_gateway.utils.date_utils import days_between

MOTORCYCLE_FIPE_PREFIX = "81"

# SGA boleto status -> lifecycle state
ERP_STATUS_LIFECYCLE = {
    "BAIXADO": SETTLED,
    "ABERTO": OPEN,
}


def lifecycle_from_erp(erp_status: str) -> str:
    """Map the SGA `situacao_boleto` label onto SETTLED / OPEN / OTHER (exact match)"""
    return ERP_STATUS_LIFECYCLE.get(erp_status, OTHER)


def is_motorcycle(fipe_code: Optional[str]) -> bool:
    return bool(fipe_code) and fipe_code.strip().startswith(MOTORCYCLE_FIPE_PREFIX)


def situation_matches(situation: str, situations: Iterable[str]) -> bool:
    """Exact, case-sensitive membership after trimming both sides"""
    label = situation.strip()
    return any(label == candidate.strip() for candidate in situations)


def select_governing_record(records: List[FinancialRecord]) -> Optional[FinancialRecord]:
    """
    Pick the boleto with the earliest due date.

    min() keeps the first of equal keys, so ties go to the earliest candidate
    in ERP order. Returns None when there are no candidates.
    """
    if not records:
        return None
    return min(records, key=lambda record: record.due_date)


def governing_vehicle(record: FinancialRecord) -> Optional[VehicleRef]:
    return record.vehicles[0] if record.vehicles else None


def evaluate_record(record: FinancialRecord, tenant: Tenant, today: date) -> RecordDecision:
    """
    Classify the governing boleto and apply the tenant's delivery policy.

    Rules, in order:
    1. SETTLED → settled
    2. anything but OPEN → regularization
    3. OPEN with situation in lag-check list → deliver unless
       (today - due_date) > lag_check_threshold_days
    4. OPEN with situation only in direct-send list → deliver
    5. OPEN with any other situation → regularization

    A situation in both lists is lag-checked.
    """
    vehicle = governing_vehicle(record)

    if record.lifecycle_state == SETTLED:
        return RecordDecision(outcome=DECISION_SETTLED, vehicle=vehicle, reason="boleto_settled")

    if record.lifecycle_state != OPEN:
        return RecordDecision(outcome=DECISION_REGULARIZATION, vehicle=vehicle, reason="boleto_not_open")

    situation = vehicle.situation if vehicle else ""
    in_lag_check = situation_matches(situation, tenant.lag_check_situations)
    in_direct_send = situation_matches(situation, tenant.direct_send_situations)

    if in_lag_check:
        lag_days = days_between(today, record.due_date)
        if lag_days > tenant.lag_check_threshold_days:
            return RecordDecision(
                outcome=DECISION_REGULARIZATION,
                vehicle=vehicle,
                reason="due_date_lag_exceeded",
                lag_days=lag_days,
            )
        return RecordDecision(outcome=DECISION_DELIVER, vehicle=vehicle, reason="lag_check_passed", lag_days=lag_days)

    if not in_direct_send:
        return RecordDecision(outcome=DECISION_REGULARIZATION, vehicle=vehicle, reason="situation_not_allowed")

    return RecordDecision(outcome=DECISION_DELIVER, vehicle=vehicle, reason="direct_send")


def is_vehicle_permitted(vehicle: VehicleRef, tenant: Tenant) -> bool:
    """Vehicle without boleto: media is allowed for any configured situation"""
    return situation_matches(vehicle.situation, tenant.direct_send_situations) or situation_matches(
        vehicle.situation, tenant.lag_check_situations
    )


def regularization_template(fipe_code: Optional[str], templates: ResponseTemplates) -> str:
    if is_motorcycle(fipe_code):
        return templates.regularization_motorcycle
    return templates.regularization_vehicle


def inspection_video_url(fipe_code: Optional[str], tenant: Tenant) -> Optional[str]:
    if is_motorcycle(fipe_code):
        return tenant.motorcycle_video_url
    return tenant.car_video_url


def select_payment_code(record: FinancialRecord) -> str:
    """PIX copy-and-paste code, falling back to the digitable line"""
    return record.pix_code or record.digitable_line


def select_payment_link(record: FinancialRecord) -> str:
    """Canonical boleto PDF link, falling back to the short link"""
    return record.link or record.short_link
