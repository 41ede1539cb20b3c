"""Promissio rights and royalties backend.

Read-only derivation and history views over contract and audit data:
contract alert derivation and the audit trail query view.
"""

__version__ = "0.1.0"
