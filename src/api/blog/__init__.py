"""Blog bounded context.

Manages the lifecycle of users and the posts they author.
"""
