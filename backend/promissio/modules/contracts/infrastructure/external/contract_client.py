"""HTTP implementation of the contract source."""

from promissio.core.errors import ExternalServiceError, ValidationError
from promissio.core.infrastructure.http_client import RestApiClient
from promissio.core.logging import get_logger
from promissio.modules.contracts.domain.entities.contract import Contract

logger = get_logger(__name__)

CONTRACTS_PATH = "/api/contracts"


class HttpContractClient(RestApiClient):
    """Reads the full contract collection from ``GET /api/contracts``."""

    async def fetch_contracts(self) -> list[Contract]:
        payload = await self.get_json(CONTRACTS_PATH)
        if not isinstance(payload, list):
            raise ExternalServiceError(
                "Contract listing must be a JSON array", service=self.service_name
            )

        try:
            contracts = [Contract.from_dict(item) for item in payload]
        except ValidationError as e:
            raise ExternalServiceError(
                f"Malformed contract in listing: {e.message}",
                service=self.service_name,
                cause=e,
            ) from e

        logger.debug("Contracts fetched", count=len(contracts))
        return contracts
