"""Rate limiter instance for SlowAPI.

Shared so both main (app.state.limiter) and route modules can use the same
instance without circular imports.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

limiter = Limiter(key_func=get_remote_address)

ADMIN_WRITE_LIMIT = "120/minute"
SELF_SERVICE_WRITE_LIMIT = "30/minute"

limit_admin_writes = limiter.limit(ADMIN_WRITE_LIMIT)
limit_self_service_writes = limiter.limit(SELF_SERVICE_WRITE_LIMIT)
