"""
nexus - application layer of Nexus Cache: configuration and cache service.
"""
