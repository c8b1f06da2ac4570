"""Integration tests for the tenant repository"""

import uuid
import pytest
from sqlalchemy.exc import OperationalError
from boleto_gateway.config import settings
from boleto_gateway.domain.exceptions import TenantStoreError
from boleto_gateway.infrastructure.database.repositories import TenantRepository

pytestmark = pytest.mark.integration


def test_get_tenant_maps_all_settings(db, seed_tenant):
    record = seed_tenant(
        situacoes_envio_direto=["ATIVO", "NOVO"],
        situacoes_com_checagem_vencimento=["INADIMPLENTE"],
        dias_checagem_vencimento=3,
    )

    tenant = TenantRepository(db).get_tenant(record.id)

    assert tenant is not None
    assert tenant.id == record.id
    assert tenant.active is True
    assert tenant.erp_token == "erp-token"
    assert tenant.erp_base_url == settings.sga_base_url
    assert tenant.days_before_due == 5
    assert tenant.days_after_due == 10
    assert tenant.direct_send_situations == ["ATIVO", "NOVO"]
    assert tenant.lag_check_situations == ["INADIMPLENTE"]
    assert tenant.lag_check_threshold_days == 3
    assert tenant.media_enabled is True
    assert tenant.motorcycle_video_url == "https://cdn.test/moto.mp4"
    assert tenant.templates.settled == "Boleto já baixado."


def test_get_tenant_null_policy_uses_defaults(db, seed_tenant):
    """Test NULL situation lists and threshold fall back to ATIVO / INADIMPLENTE / 2"""
    record = seed_tenant(
        situacoes_envio_direto=None,
        situacoes_com_checagem_vencimento=None,
        dias_checagem_vencimento=None,
    )

    tenant = TenantRepository(db).get_tenant(record.id)

    assert tenant.direct_send_situations == ["ATIVO"]
    assert tenant.lag_check_situations == ["INADIMPLENTE"]
    assert tenant.lag_check_threshold_days == 2


def test_get_tenant_empty_list_is_kept(db, seed_tenant):
    record = seed_tenant(situacoes_com_checagem_vencimento=[])

    tenant = TenantRepository(db).get_tenant(record.id)

    assert tenant.lag_check_situations == []


def test_get_tenant_unknown(db):
    assert TenantRepository(db).get_tenant(uuid.uuid4()) is None


def test_get_tenant_incomplete_configuration(db, seed_tenant):
    record = seed_tenant(with_inspection=False)

    assert TenantRepository(db).get_tenant(record.id) is None


def test_get_tenant_inactive_is_returned(db, seed_tenant):
    """Test repository returns inactive tenants; the resolution decides"""
    record = seed_tenant(ativo=False)

    assert TenantRepository(db).get_tenant(record.id).active is False


def test_get_tenant_database_error(db, monkeypatch):
    def broken_query(*args, **kwargs):
        raise OperationalError("SELECT", {}, Exception("connection lost"))

    monkeypatch.setattr(db, "query", broken_query)

    with pytest.raises(TenantStoreError):
        TenantRepository(db).get_tenant(uuid.uuid4())
