"""Contract registry (read side).

Contracts are owned by the contract registry service; this module only reads
them to derive notifications and to serve the read-only contract listing.
"""
