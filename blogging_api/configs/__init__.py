from blogging_api.configs.settings import (
    CONFIG_MAP,
    HasherConfig,
    LimiterConfig,
    Settings,
    settings,
)

__all__ = [
    "CONFIG_MAP",
    "HasherConfig",
    "LimiterConfig",
    "Settings",
    "settings",
]
