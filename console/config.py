"""
Console configuration.

All values come from the environment so deployments never edit code.
"""

import os
import logging

# REST backend
API_BASE_URL = os.getenv("TRUEPORTME_API_URL", "http://localhost:5000/api")
API_TIMEOUT = float(os.getenv("TRUEPORTME_API_TIMEOUT", "10"))  # seconds

# India state/district directory used by the institution form
GEO_DATA_URL = os.getenv(
    "GEO_DATA_URL",
    "https://raw.githubusercontent.com/sab99r/Indian-States-And-Districts/master/states-and-districts.json",
)
GEO_CACHE_SECONDS = int(os.getenv("GEO_CACHE_SECONDS", "3600"))
GEO_TIMEOUT = float(os.getenv("GEO_TIMEOUT", "5"))  # seconds

# Page sizes
INSTITUTIONS_PAGE_LIMIT = 100
ADMINS_PAGE_LIMIT = 100
CLAIMS_PAGE_LIMIT = 20
STUDENTS_PAGE_LIMIT = 12
PROFILE_REQUESTS_PAGE_LIMIT = 10

LOG_LEVEL = os.getenv("TRUEPORTME_LOG_LEVEL", "INFO")
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str = LOG_LEVEL) -> None:
    """Configure root logging once (safe to call on every Streamlit rerun)."""
    root = logging.getLogger()
    if root.handlers:
        root.setLevel(level.upper())
        return
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
