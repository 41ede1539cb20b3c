"""Read-only SQL repository for contracts."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from promissio.core.logging import get_logger
from promissio.modules.contracts.domain.entities.contract import Contract
from promissio.modules.contracts.infrastructure.models import ContractModel

logger = get_logger(__name__)


class ContractRepository:
    """
    Contract queries over an async session.

    Implements the ``ContractSource`` port for in-process use by the
    notification endpoint.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def find_all(self) -> list[Contract]:
        """All contracts, newest first."""
        stmt = select(ContractModel).order_by(
            ContractModel.created_at.desc(), ContractModel.id
        )
        result = await self.session.execute(stmt)
        contracts = [self._model_to_entity(model) for model in result.scalars().all()]

        logger.debug("Contracts loaded", count=len(contracts))
        return contracts

    async def fetch_contracts(self) -> list[Contract]:
        return await self.find_all()

    @staticmethod
    def _model_to_entity(model: ContractModel) -> Contract:
        return Contract(
            id=model.id,
            partner=model.partner,
            content=model.content,
            status=model.status,
            start_date=model.start_date,
            end_date=model.end_date,
            created_at=model.created_at,
        )
