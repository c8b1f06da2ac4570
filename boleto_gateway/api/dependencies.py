"""Dependency injection for FastAPI endpoints"""

from fastapi import Depends, Request
from sqlalchemy.orm import Session
from boleto_gateway.domain.interfaces import ERPClientFactory, MessagingClientFactory
from boleto_gateway.domain.models import Tenant
from boleto_gateway.infrastructure.clients.atomos import AtomosClient
from boleto_gateway.infrastructure.clients.sga import SGAClient
from boleto_gateway.infrastructure.database.repositories import TenantRepository
from boleto_gateway.infrastructure.database.session import get_db
from boleto_gateway.services.dispatch import DispatchScheduler
from boleto_gateway.services.resolution import BoletoResolutionService


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_dispatch_scheduler(request: Request) -> DispatchScheduler:
    """App-wide scheduler owning in-flight notifications"""
    return request.app.state.dispatch_scheduler


def get_erp_client_factory() -> ERPClientFactory:
    """Provide SGA client per tenant (credentials are tenant-specific)"""

    def build(tenant: Tenant) -> SGAClient:
        return SGAClient(token=tenant.erp_token, base_url=tenant.erp_base_url)

    return build


def get_messaging_client_factory() -> MessagingClientFactory:
    """Provide Atomos client per tenant"""

    def build(tenant: Tenant) -> AtomosClient:
        return AtomosClient(chat_token=tenant.chat_token, channel_token=tenant.channel_token)

    return build


def get_resolution_service(
    db: Session = Depends(get_db),
    scheduler: DispatchScheduler = Depends(get_dispatch_scheduler),
    erp_client_factory: ERPClientFactory = Depends(get_erp_client_factory),
    messaging_client_factory: MessagingClientFactory = Depends(get_messaging_client_factory),
) -> BoletoResolutionService:
    return BoletoResolutionService(
        tenant_store=TenantRepository(db),
        erp_client_factory=erp_client_factory,
        messaging_client_factory=messaging_client_factory,
        scheduler=scheduler,
    )
