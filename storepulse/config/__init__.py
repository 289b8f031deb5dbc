from .loader import load_config
from .defaults import DEFAULT_CONFIG
from .settings import ColumnConfig

__all__ = [
    "load_config",
    "DEFAULT_CONFIG",
    "ColumnConfig",
]
