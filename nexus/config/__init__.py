from .manager import ConfigManager, substituteEnvVars

__all__ = ["ConfigManager", "substituteEnvVars"]
