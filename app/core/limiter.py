"""SlowAPI limiter shared by main (app.state.limiter) and the route modules.

Limits are per client address.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

limiter = Limiter(key_func=get_remote_address)

# Password guessing against /admin/verify.
ADMIN_VERIFY_LIMIT = "10/minute"
# Location patches, audit submissions, resolve batches.
WRITE_ENDPOINT_LIMIT = "120/minute"
# Each uncached snapshot walks the whole Snipe-IT inventory.
SNAPSHOT_LIMIT = "30/minute"

limit_admin_verify = limiter.limit(ADMIN_VERIFY_LIMIT)
limit_writes = limiter.limit(WRITE_ENDPOINT_LIMIT)
limit_snapshot = limiter.limit(SNAPSHOT_LIMIT)
