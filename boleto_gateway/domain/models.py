"""Domain models - pure Python dataclasses representing business entities"""

import uuid
from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional

# Boleto lifecycle states
SETTLED = "SETTLED"
OPEN = "OPEN"
OTHER = "OTHER"

# Resolution channels
CHANNEL_ACTIVE = "active"
CHANNEL_BLOCKED = "blocked"

# Record decisions
DECISION_SETTLED = "settled"
DECISION_REGULARIZATION = "regularization"
DECISION_DELIVER = "deliver"


@dataclass
class VehicleRef:
    """Vehicle as reported by the ERP"""

    plate: str
    fipe_code: str  # classification code, "81..." is a motorcycle
    situation: str  # tenant vocabulary, e.g. "ATIVO", "INADIMPLENTE"


@dataclass
class FinancialRecord:
    """Boleto (payable installment) issued by the ERP"""

    identifier: str
    due_date: date
    amount: str
    lifecycle_state: str  # SETTLED | OPEN | OTHER
    erp_status: str = ""
    pix_code: str = ""
    digitable_line: str = ""
    link: str = ""
    short_link: str = ""
    vehicles: List[VehicleRef] = field(default_factory=list)


@dataclass
class ResponseTemplates:
    """Tenant message templates"""

    success: str
    regularization_motorcycle: str
    regularization_vehicle: str
    settled: str


@dataclass
class Tenant:
    """Tenant (association) with credentials and boleto policy"""

    id: uuid.UUID
    name: str
    active: bool
    erp_token: str
    chat_token: str
    channel_token: str
    erp_base_url: str
    templates: ResponseTemplates
    days_before_due: int = 0
    days_after_due: int = 0
    direct_send_situations: List[str] = field(default_factory=lambda: ["ATIVO"])
    lag_check_situations: List[str] = field(default_factory=lambda: ["INADIMPLENTE"])
    lag_check_threshold_days: int = 2
    media_enabled: bool = False
    motorcycle_video_url: Optional[str] = None
    car_video_url: Optional[str] = None


@dataclass
class ResolutionOutcome:
    """Message to return to the chat integration"""

    message: str
    channel: str  # "active" | "blocked"
    kind: str = "unknown"  # which branch produced the message, for logs and metrics


@dataclass
class RecordDecision:
    """Output of status classification and policy evaluation"""

    outcome: str  # "settled" | "regularization" | "deliver"
    vehicle: Optional[VehicleRef]
    reason: str
    lag_days: Optional[int] = None
