from slowapi import Limiter
from slowapi.util import get_remote_address

from effitrack.core.config import settings

limiter = Limiter(key_func=get_remote_address)

# Applied to endpoints that fan out to paid external services
OPERATOR_RATE_LIMIT = f"{settings.rate_limit_per_minute}/minute"
