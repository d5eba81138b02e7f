"""User management core: entities, use cases, repository contract and domain errors."""

__version__ = "1.0.0"
