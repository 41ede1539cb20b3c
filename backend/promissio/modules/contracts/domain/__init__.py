"""Contract domain layer."""

from .entities.contract import Contract, ContractStatus
from .interfaces.contract_source import ContractSource

__all__ = ["Contract", "ContractSource", "ContractStatus"]
