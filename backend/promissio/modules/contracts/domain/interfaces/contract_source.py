"""Port for reading the contract collection."""

from typing import Protocol

from promissio.modules.contracts.domain.entities.contract import Contract


class ContractSource(Protocol):
    """Returns every contract the caller is authorised to see, in source order."""

    async def fetch_contracts(self) -> list[Contract]:
        ...
