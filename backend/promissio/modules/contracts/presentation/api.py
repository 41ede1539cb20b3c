"""Read-only contract listing route."""

from fastapi import APIRouter, Depends

from promissio.modules.contracts.infrastructure.repositories.contract_repository import (
    ContractRepository,
)
from promissio.modules.contracts.presentation.dependencies import (
    get_contract_repository,
)
from promissio.modules.contracts.presentation.schemas import ContractResponse

router = APIRouter()


@router.get("", response_model=list[ContractResponse])
async def list_contracts(
    repository: ContractRepository = Depends(get_contract_repository),
) -> list[ContractResponse]:
    """All contracts, newest first."""
    contracts = await repository.find_all()
    return [ContractResponse.from_domain(contract) for contract in contracts]
