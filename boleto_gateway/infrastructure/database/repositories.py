"""Data access layer for tenant configuration"""

import uuid
from typing import List, Optional
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from boleto_gateway.config import settings
from boleto_gateway.domain.exceptions import TenantStoreError
from boleto_gateway.domain.models import ResponseTemplates, Tenant
from boleto_gateway.infrastructure.database.models import TenantRecord

DEFAULT_DIRECT_SEND_SITUATIONS = ["ATIVO"]
DEFAULT_LAG_CHECK_SITUATIONS = ["INADIMPLENTE"]
DEFAULT_LAG_CHECK_THRESHOLD_DAYS = 2


class TenantRepository:
    """Read-only repository for tenants and their boleto policy"""

    def __init__(self, db: Session):
        self.db = db

    def get_tenant(self, tenant_id: uuid.UUID) -> Optional[Tenant]:
        """
        Load a tenant with its three configuration rows.

        Returns None when the tenant or any configuration row is missing.

        Raises:
            TenantStoreError: On database errors
        """
        try:
            record = (
                self.db.query(TenantRecord)
                .filter(TenantRecord.id == tenant_id)
                .first()
            )
            if record is None:
                return None
            return self._to_domain(record)
        except SQLAlchemyError as e:
            raise TenantStoreError(f"Tenant lookup failed: {e.__class__.__name__}") from e

    def _to_domain(self, record: TenantRecord) -> Optional[Tenant]:
        boleto = record.boleto_settings
        responses = record.response_settings
        inspection = record.inspection_settings
        if boleto is None or responses is None or inspection is None:
            return None

        return Tenant(
            id=record.id,
            name=record.nome,
            active=record.ativo,
            erp_token=record.token_erp,
            chat_token=record.token_chat,
            channel_token=record.token_canal,
            erp_base_url=record.base_url or settings.sga_base_url,
            templates=ResponseTemplates(
                success=responses.response_sucesso,
                regularization_motorcycle=responses.response_regularizacao_moto,
                regularization_vehicle=responses.response_regularizacao_veiculo,
                settled=responses.response_boleto_baixado,
            ),
            days_before_due=boleto.dias_antes_vencimento,
            days_after_due=boleto.dias_depois_vencimento,
            direct_send_situations=_situations(boleto.situacoes_envio_direto, DEFAULT_DIRECT_SEND_SITUATIONS),
            lag_check_situations=_situations(boleto.situacoes_com_checagem_vencimento, DEFAULT_LAG_CHECK_SITUATIONS),
            lag_check_threshold_days=(
                boleto.dias_checagem_vencimento
                if boleto.dias_checagem_vencimento is not None
                else DEFAULT_LAG_CHECK_THRESHOLD_DAYS
            ),
            media_enabled=bool(inspection.enviar_midia),
            motorcycle_video_url=inspection.video_moto,
            car_video_url=inspection.video_carro,
        )


def _situations(configured: Optional[List[str]], default: List[str]) -> List[str]:
    # NULL means default; an empty list means no situation qualifies
    return list(default if configured is None else configured)
