from .contract_client import HttpContractClient

__all__ = ["HttpContractClient"]
