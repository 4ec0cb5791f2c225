"""Griffin banking API integration package."""
import os
from typing import Final

BASE_URL: Final[str] = os.getenv("GRIFFIN_API_BASE_URL", "https://api.griffin.com")
INDEX_PATH: Final[str] = "/v0/index"

# Per-request timeout in seconds.
HTTP_TIMEOUT: Final[float] = float(os.getenv("GRIFFIN_HTTP_TIMEOUT", "10"))
HTTP_MAX_ATTEMPTS: Final[int] = int(os.getenv("GRIFFIN_HTTP_MAX_ATTEMPTS", "3"))
# Longest Retry-After (seconds) honoured on a GET; a longer one is not retried.
HTTP_MAX_RETRY_AFTER: Final[float] = float(os.getenv("GRIFFIN_HTTP_MAX_RETRY_AFTER", "2"))

# Operational account provisioning poll (seconds).
POLL_INTERVAL: Final[float] = float(os.getenv("GRIFFIN_POLL_INTERVAL", "1"))
POLL_TIMEOUT: Final[float] = float(os.getenv("GRIFFIN_POLL_TIMEOUT", "10"))

DEFAULT_CURRENCY: Final[str] = "GBP"
OPERATIONAL_ACCOUNT: Final[str] = "operational-account"
