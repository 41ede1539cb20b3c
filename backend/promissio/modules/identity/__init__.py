"""User accounts (read side).

Only the ``users`` table is modelled here, for resolving the actor of audit
log entries. Authentication and invite acceptance live elsewhere.
"""
