"""Core infrastructure: configuration, errors, logging, database and CQRS primitives."""
