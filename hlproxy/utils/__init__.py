from .config import config, Config
from .logger import get_logger, log_upstream_failure

__all__ = ["config", "Config", "get_logger", "log_upstream_failure"]
