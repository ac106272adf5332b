import os
from dotenv import load_dotenv

load_dotenv()

USER_AGENT = "golf-rivals/0.3 (+https://code.golf)"
API_BASE_URL = os.getenv("GOLF_RIVALS_API", "https://code.golf/api").rstrip("/")
TIMEOUT = float(os.getenv("GOLF_RIVALS_TIMEOUT", "20"))

# code.golf's API is flaky; a hole gets this many tries before the run is aborted
FETCH_ATTEMPTS = int(os.getenv("GOLF_RIVALS_ATTEMPTS", "10"))
RETRY_WAIT_SECONDS = float(os.getenv("GOLF_RIVALS_RETRY_WAIT", "1.0"))
FETCH_WORKERS = int(os.getenv("GOLF_RIVALS_WORKERS", "16"))

DEFAULT_LANGUAGE = "rust"
DEFAULT_SCORING = "bytes"
DEFAULT_CUTOFF = "now"
NAME_WIDTH = 24
BAR_WIDTH = 50

# rich color names, keyed by Role value
PALETTE = {
    "primary": "bright_cyan",
    "secondary": "bright_magenta",
    "reference": "bright_yellow",
}
FAVORABLE = "green"
UNFAVORABLE = "red"
EVEN = "yellow"
FILLER = "·"
