from kink import inject

from beacon.core.config import Configuration
from beacon.domain.common.utils import DateTimeUtils

from .models import LivenessReport


@inject
def check_liveness(config: Configuration) -> LivenessReport:
    """Build a fresh liveness report.

    Reads only the clock and the active configuration, so it is safe to call
    from any number of concurrent requests.
    """
    return LivenessReport(
        timestamp=DateTimeUtils.now(),
        environment=config.app_environment,
    )
