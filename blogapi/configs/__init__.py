from blogapi.configs.logger import file_logger
from blogapi.configs.settings import LimiterConfig, settings

__all__ = [
    "LimiterConfig",
    "file_logger",
    "settings",
]
