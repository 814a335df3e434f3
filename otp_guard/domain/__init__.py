"""Domain layer: entities, errors, enums, value objects and ports.

The domain has no dependencies on infrastructure or presentation.
"""
