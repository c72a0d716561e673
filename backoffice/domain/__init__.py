"""Domain layer: entities, value objects, enums, role hierarchy, and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""
