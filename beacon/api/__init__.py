from .errors import ERROR_PATHS
from .router import router as api_router
from .up import LIVENESS_PATH

__all__ = ['ERROR_PATHS', 'LIVENESS_PATH', 'api_router']
