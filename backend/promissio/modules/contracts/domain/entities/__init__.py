from .contract import Contract, ContractStatus

__all__ = ["Contract", "ContractStatus"]
