"""Pytest fixtures for testing"""

import uuid
import pytest
from datetime import date
from typing import Callable, Generator, List, Optional
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from boleto_gateway.api.main import create_app
from boleto_gateway.api.dependencies import get_erp_client_factory, get_messaging_client_factory
from boleto_gateway.domain.exceptions import ERPAPIError
from boleto_gateway.domain.models import FinancialRecord, ResponseTemplates, Tenant, VehicleRef, OPEN
from boleto_gateway.infrastructure.database.models import (
    Base,
    TenantRecord,
    BoletoSettingsRecord,
    ResponseSettingsRecord,
    InspectionSettingsRecord,
)
from boleto_gateway.infrastructure.database.session import get_db
from boleto_gateway.services.dispatch import DispatchScheduler
from boleto_gateway.services.resolution import BoletoResolutionService


# Test database
TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

TODAY = date(2024, 5, 12)

SUCCESS_TEMPLATE = "Seu boleto vence em {{data_vencimento}}, valor R$ {{ $valor_boleto }}."
MOTO_TEMPLATE = "Moto: procure a associação para regularizar."
VEHICLE_TEMPLATE = "Veículo: procure a associação para regularizar."
SETTLED_TEMPLATE = "Boleto já baixado."


class FakeERPClient:
    """In-memory SGA double"""

    def __init__(self) -> None:
        self.records: List[FinancialRecord] = []
        self.vehicles: List[VehicleRef] = []
        self.list_error: Optional[Exception] = None
        self.find_error: Optional[Exception] = None
        self.list_calls: List[tuple] = []
        self.find_calls: List[str] = []

    async def list_records_by_plate_and_window(self, plate, window_start, window_end):
        self.list_calls.append((plate, window_start, window_end))
        if self.list_error:
            raise self.list_error
        return list(self.records)

    async def find_vehicle_by_plate(self, plate):
        self.find_calls.append(plate)
        if self.find_error:
            raise self.find_error
        return list(self.vehicles)


class FakeMessagingClient:
    """Records every message; optionally fails like a broken transport"""

    def __init__(self) -> None:
        self.sent: List[tuple] = []
        self.fail_with: Optional[Exception] = None

    async def send_message(self, to, text, file_url=None):
        if self.fail_with:
            raise self.fail_with
        self.sent.append((to, text, file_url))


class FakeTenantStore:
    def __init__(self, tenant: Optional[Tenant]) -> None:
        self.tenant = tenant

    def get_tenant(self, tenant_id):
        if self.tenant is not None and self.tenant.id == tenant_id:
            return self.tenant
        return None


@pytest.fixture
def make_tenant() -> Callable[..., Tenant]:
    """Tenant factory with realistic defaults"""

    def factory(**overrides) -> Tenant:
        fields = dict(
            id=uuid.uuid4(),
            name="Associação Teste",
            active=True,
            erp_token="erp-token",
            chat_token="chat-token",
            channel_token="channel-token",
            erp_base_url="https://sga.test/api/sga/v2",
            templates=ResponseTemplates(
                success=SUCCESS_TEMPLATE,
                regularization_motorcycle=MOTO_TEMPLATE,
                regularization_vehicle=VEHICLE_TEMPLATE,
                settled=SETTLED_TEMPLATE,
            ),
            days_before_due=5,
            days_after_due=10,
            direct_send_situations=["ATIVO"],
            lag_check_situations=["INADIMPLENTE"],
            lag_check_threshold_days=2,
            media_enabled=True,
            motorcycle_video_url="https://cdn.test/moto.mp4",
            car_video_url="https://cdn.test/carro.mp4",
        )
        fields.update(overrides)
        return Tenant(**fields)

    return factory


@pytest.fixture
def make_record() -> Callable[..., FinancialRecord]:
    """Open boleto factory for an active car"""

    def factory(**overrides) -> FinancialRecord:
        fields = dict(
            identifier="1001",
            due_date=date(2024, 5, 10),
            amount="150.00",
            lifecycle_state=OPEN,
            erp_status="ABERTO",
            pix_code="00020126PIXCOPIACOLA",
            digitable_line="23793381286000000001234567890123456789012345",
            link="https://boletos.test/1001.pdf",
            short_link="https://bol.to/1001",
            vehicles=[VehicleRef(plate="ABC1D23", fipe_code="0010231", situation="ATIVO")],
        )
        fields.update(overrides)
        return FinancialRecord(**fields)

    return factory


@pytest.fixture
def fake_erp() -> FakeERPClient:
    return FakeERPClient()


@pytest.fixture
def fake_messaging() -> FakeMessagingClient:
    return FakeMessagingClient()


@pytest.fixture
def scheduler() -> DispatchScheduler:
    return DispatchScheduler()


@pytest.fixture
def build_service(fake_erp, fake_messaging, scheduler) -> Callable[[Optional[Tenant]], BoletoResolutionService]:
    """Resolution service wired to in-memory doubles, with today pinned to TODAY"""

    def factory(tenant: Optional[Tenant]) -> BoletoResolutionService:
        return BoletoResolutionService(
            tenant_store=FakeTenantStore(tenant),
            erp_client_factory=lambda _tenant: fake_erp,
            messaging_client_factory=lambda _tenant: fake_messaging,
            scheduler=scheduler,
            today_provider=lambda: TODAY,
        )

    return factory


@pytest.fixture
def db() -> Generator[Session, None, None]:
    """Create test database and session"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def seed_tenant(db: Session) -> Callable[..., TenantRecord]:
    """Insert a tenant with its three configuration rows"""

    def factory(ativo: bool = True, with_inspection: bool = True, **boleto_overrides) -> TenantRecord:
        tenant = TenantRecord(
            nome="Associação Teste",
            ativo=ativo,
            token_erp="erp-token",
            token_chat="chat-token",
            token_canal="channel-token",
        )
        db.add(tenant)
        db.flush()

        boleto_fields = dict(
            dias_antes_vencimento=5,
            dias_depois_vencimento=10,
            situacoes_envio_direto=["ATIVO"],
            situacoes_com_checagem_vencimento=["INADIMPLENTE"],
            dias_checagem_vencimento=2,
        )
        boleto_fields.update(boleto_overrides)
        db.add(BoletoSettingsRecord(cliente_id=tenant.id, **boleto_fields))
        db.add(
            ResponseSettingsRecord(
                cliente_id=tenant.id,
                response_sucesso=SUCCESS_TEMPLATE,
                response_regularizacao_moto=MOTO_TEMPLATE,
                response_regularizacao_veiculo=VEHICLE_TEMPLATE,
                response_boleto_baixado=SETTLED_TEMPLATE,
            )
        )
        if with_inspection:
            db.add(
                InspectionSettingsRecord(
                    cliente_id=tenant.id,
                    enviar_midia=True,
                    video_moto="https://cdn.test/moto.mp4",
                    video_carro="https://cdn.test/carro.mp4",
                )
            )
        db.commit()
        return tenant

    return factory


@pytest.fixture
def app(db: Session, fake_erp: FakeERPClient, fake_messaging: FakeMessagingClient):
    """FastAPI app with test database and in-memory SGA/Atomos doubles"""
    app = create_app()

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_erp_client_factory] = lambda: (lambda tenant: fake_erp)
    app.dependency_overrides[get_messaging_client_factory] = lambda: (lambda tenant: fake_messaging)
    return app


@pytest.fixture
def client(app) -> Generator[TestClient, None, None]:
    """Create FastAPI test client; leaving the block drains pending notifications"""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def erp_failure() -> ERPAPIError:
    return ERPAPIError("SGA API error: 503 Service Unavailable")
