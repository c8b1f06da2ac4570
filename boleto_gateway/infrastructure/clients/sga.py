"""SGA (Hinova ERP) HTTP client for boletos and vehicles"""

import httpx
from typing import Any, Dict, List
from urllib.parse import quote
from boleto_gateway.domain.models import FinancialRecord, VehicleRef
from boleto_gateway.domain.exceptions import ERPAPIError, InvalidRecordDataError
from boleto_gateway.domain.policy import lifecycle_from_erp
from boleto_gateway.utils.date_utils import parse_date
from boleto_gateway.config import settings


class SGAClient:
    """Client for the SGA v2 API, authenticated with a tenant's ERP token"""

    def __init__(
        self,
        token: str,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.token = token
        self.base_url = (base_url or settings.sga_base_url).rstrip("/")
        self.timeout = timeout or settings.http_timeout_seconds
        self.transport = transport

    def _headers(self) -> Dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.token}",
        }

    async def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            try:
                response = await client.request(
                    method,
                    f"{self.base_url}{path}",
                    headers=self._headers(),
                    **kwargs,
                )
                response.raise_for_status()
                return response.json()

            except httpx.TimeoutException as e:
                raise ERPAPIError(f"SGA API timeout after {self.timeout}s") from e
            except httpx.HTTPStatusError as e:
                raise ERPAPIError(f"SGA API error: {e.response.status_code} {e.response.text}") from e
            except httpx.RequestError as e:
                raise ERPAPIError(f"SGA API unreachable: {e}") from e
            except ValueError as e:
                raise ERPAPIError(f"Invalid JSON from SGA: {e}") from e

    async def list_records_by_plate_and_window(
        self, plate: str, window_start: str, window_end: str
    ) -> List[FinancialRecord]:
        """
        List boletos tied to a plate with due dates inside the window.

        Args:
            plate: Normalized plate
            window_start: First due date, DD/MM/YYYY
            window_end: Last due date, DD/MM/YYYY

        Raises:
            ERPAPIError: On timeout, HTTP errors, or invalid response
        """
        data = await self._request(
            "POST",
            "/listar/boleto-associado-veiculo",
            json={
                "placa": plate,
                "data_vencimento_inicial": window_start,
                "data_vencimento_final": window_end,
            },
        )
        if not isinstance(data, list):
            return []

        try:
            return [parse_boleto(item) for item in data]
        except (KeyError, ValueError, TypeError, AttributeError) as e:
            raise InvalidRecordDataError(f"Invalid boleto data from SGA: {e}") from e

    async def find_vehicle_by_plate(self, plate: str) -> List[VehicleRef]:
        """
        Look up a vehicle by plate alone.

        Raises:
            ERPAPIError: On timeout, HTTP errors, or invalid response
        """
        data = await self._request("GET", f"/veiculo/buscar/{quote(plate, safe='')}")
        if not isinstance(data, list):
            return []

        try:
            return [
                VehicleRef(
                    plate=str(item.get("placa") or ""),
                    fipe_code=str(item.get("codigo_fipe") or ""),
                    situation=str(item.get("descricao_situacao") or ""),
                )
                for item in data
            ]
        except AttributeError as e:
            raise InvalidRecordDataError(f"Invalid vehicle data from SGA: {e}") from e


def parse_boleto(item: Dict[str, Any]) -> FinancialRecord:
    """Map one SGA boleto payload onto a FinancialRecord"""
    pix = item.get("pix") or {}
    erp_status = str(item.get("situacao_boleto") or "")
    return FinancialRecord(
        identifier=str(item.get("nosso_numero") or ""),
        due_date=parse_date(item["data_vencimento"]),
        amount=str(item.get("valor_boleto") or ""),
        lifecycle_state=lifecycle_from_erp(erp_status),
        erp_status=erp_status,
        pix_code=str(pix.get("copia_cola") or ""),
        digitable_line=str(item.get("linha_digitavel") or ""),
        link=str(item.get("link_boleto") or ""),
        short_link=str(item.get("short_link") or ""),
        vehicles=[
            VehicleRef(
                plate=str(vehicle.get("placa") or ""),
                fipe_code=str(vehicle.get("codigo_fipe") or ""),
                situation=str(vehicle.get("situacao_veiculo") or ""),
            )
            for vehicle in item.get("veiculos") or []
        ],
    )
