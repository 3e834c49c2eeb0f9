"""Domain layer for the blog bounded context.

Contains aggregates, value objects, and domain exceptions. The domain layer
has no dependency on infrastructure, the application layer, or frameworks.
"""
