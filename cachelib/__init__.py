"""
cachelib - reusable caching building blocks for Nexus Cache.
"""
