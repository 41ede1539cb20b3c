from .contract_source import ContractSource

__all__ = ["ContractSource"]
