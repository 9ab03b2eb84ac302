"""Core domain layer: entities, store interfaces, services, exceptions."""
