from .api import APIConfiguration
from .cable import CableConfiguration
from .log import LogConfiguration
from .observability import ObservabilityConfiguration

__all__ = [
    'APIConfiguration',
    'CableConfiguration',
    'LogConfiguration',
    'ObservabilityConfiguration',
]
