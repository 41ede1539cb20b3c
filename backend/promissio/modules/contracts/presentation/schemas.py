"""Response schemas for the contract listing."""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from promissio.modules.contracts.domain.entities.contract import Contract


class ContractResponse(BaseModel):
    """Contract as served by ``GET /api/contracts``."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    partner: str
    content: str | None = None
    status: str
    start_date: date | None = None
    end_date: date | None = None
    created_at: datetime = Field(..., description="Creation timestamp (UTC)")

    @classmethod
    def from_domain(cls, contract: Contract) -> "ContractResponse":
        return cls(
            id=contract.id,
            partner=contract.partner,
            content=contract.content,
            status=str(getattr(contract.status, "value", contract.status)),
            start_date=contract.start_date,
            end_date=contract.end_date,
            created_at=contract.created_at,
        )
