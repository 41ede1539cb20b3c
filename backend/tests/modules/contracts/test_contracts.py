"""Tests for the contract read model, repository and HTTP client."""

from datetime import UTC, date, datetime

import httpx
import pytest

from promissio.core.config import ApiClientConfig
from promissio.core.errors import ExternalServiceError, UnauthorizedError, ValidationError
from promissio.modules.contracts.domain.entities.contract import (
    Contract,
    ContractStatus,
)
from promissio.modules.contracts.infrastructure.external.contract_client import (
    HttpContractClient,
)
from promissio.modules.contracts.infrastructure.repositories.contract_repository import (
    ContractRepository,
)

CONFIG = ApiClientConfig(base_url="http://api.test")

PAYLOAD = {
    "id": "c-1",
    "partner": "Acme Films",
    "content": "Summer Catalogue",
    "status": "Active",
    "startDate": "2024-01-01",
    "endDate": "2025-03-20",
    "createdAt": "2024-01-01T08:00:00Z",
}


class TestContract:
    """Contract read model."""

    def test_from_dict(self):
        contract = Contract.from_dict(PAYLOAD)

        assert contract.status is ContractStatus.ACTIVE
        assert contract.end_date == date(2025, 3, 20)
        assert contract.created_at == datetime(2024, 1, 1, 8, 0, tzinfo=UTC)
        assert contract.label == "Acme Films - Summer Catalogue"

    def test_end_date_given_as_timestamp(self):
        contract = Contract.from_dict({**PAYLOAD, "endDate": "2025-03-20T00:00:00.000Z"})

        assert contract.end_date == date(2025, 3, 20)

    def test_unknown_status_is_kept(self):
        contract = Contract.from_dict({**PAYLOAD, "status": "Suspended"})

        assert contract.status == "Suspended"

    def test_optional_fields_may_be_absent(self):
        contract = Contract.from_dict(
            {"id": "c-2", "partner": "Blue Harbor", "status": "Draft", "createdAt": "2025-01-01"}
        )

        assert contract.end_date is None
        assert contract.content is None
        assert contract.label == "Blue Harbor"

    @pytest.mark.parametrize("missing", ["id", "partner", "status", "createdAt"])
    def test_missing_required_field(self, missing):
        payload = dict(PAYLOAD)
        payload.pop(missing)

        with pytest.raises(ValidationError):
            Contract.from_dict(payload)

    def test_wire_format(self):
        assert Contract.from_dict(PAYLOAD).to_wire()["endDate"] == "2025-03-20"


class TestContractRepository:
    """SQL reads."""

    @pytest.mark.asyncio
    async def test_find_all_newest_first(self, seeded_database):
        async with seeded_database.session() as session:
            contracts = await ContractRepository(session).fetch_contracts()

        assert [contract.id for contract in contracts] == ["c-new", "c-expiring", "c-expired"]
        assert contracts[2].label == "Acme Films - Summer Catalogue"
        assert contracts[0].created_at.tzinfo is not None


class TestHttpContractClient:
    """Contract listing over HTTP."""

    @staticmethod
    def client_for(handler):
        return HttpContractClient(
            CONFIG,
            client=httpx.AsyncClient(
                base_url=CONFIG.base_url, transport=httpx.MockTransport(handler)
            ),
        )

    @pytest.mark.asyncio
    async def test_fetch_contracts(self):
        def handler(request):
            assert request.url.path == "/api/contracts"
            return httpx.Response(200, json=[PAYLOAD])

        contracts = await self.client_for(handler).fetch_contracts()

        assert [contract.id for contract in contracts] == ["c-1"]

    @pytest.mark.asyncio
    async def test_unauthorized(self):
        client = self.client_for(lambda request: httpx.Response(401))

        with pytest.raises(UnauthorizedError):
            await client.fetch_contracts()

    @pytest.mark.asyncio
    async def test_not_found(self):
        client = self.client_for(lambda request: httpx.Response(404))

        with pytest.raises(ExternalServiceError) as exc_info:
            await client.fetch_contracts()

        assert exc_info.value.upstream_status == 404

    @pytest.mark.asyncio
    async def test_invalid_json(self):
        client = self.client_for(lambda request: httpx.Response(200, text="<html>"))

        with pytest.raises(ExternalServiceError):
            await client.fetch_contracts()
