"""Collaborator contracts injected into the resolution service"""

import uuid
from typing import Callable, List, Optional, Protocol
from boleto_gateway.domain.models import FinancialRecord, Tenant, VehicleRef


class TenantStore(Protocol):
    def get_tenant(self, tenant_id: uuid.UUID) -> Optional[Tenant]:
        """Return the tenant with its policy, or None when unknown/incomplete"""
        ...


class ERPClient(Protocol):
    async def list_records_by_plate_and_window(
        self, plate: str, window_start: str, window_end: str
    ) -> List[FinancialRecord]:
        ...

    async def find_vehicle_by_plate(self, plate: str) -> List[VehicleRef]:
        ...


class MessagingClient(Protocol):
    async def send_message(self, to: str, text: str, file_url: Optional[str] = None) -> None:
        ...


ERPClientFactory = Callable[[Tenant], ERPClient]
MessagingClientFactory = Callable[[Tenant], MessagingClient]
