"""Core domain layer: entities, exceptions and protocol contracts."""
