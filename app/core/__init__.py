"""
Core architecture components: DDD base classes, dependency container,
application factory and lifecycle.
"""
