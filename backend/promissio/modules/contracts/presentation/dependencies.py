"""FastAPI dependencies for the contracts module."""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from promissio.core.database import get_session
from promissio.modules.contracts.infrastructure.repositories.contract_repository import (
    ContractRepository,
)


def get_contract_repository(
    session: AsyncSession = Depends(get_session),
) -> ContractRepository:
    return ContractRepository(session)
