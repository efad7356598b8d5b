from .models import LIVENESS_STATUS, LivenessReport
from .service import check_liveness

__all__ = ['LIVENESS_STATUS', 'LivenessReport', 'check_liveness']
