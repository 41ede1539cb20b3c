from .contract_repository import ContractRepository

__all__ = ["ContractRepository"]
