"""Configuration settings for the U-Bahn navigator."""

import os
from dotenv import load_dotenv

load_dotenv()

# Optional JSON file replacing the built-in line data
LINES_FILE = os.getenv("UBAHN_LINES_FILE")

# Upper bound on hops explored per route search (unset = unbounded)
_max_hops = os.getenv("UBAHN_MAX_ROUTE_HOPS")
MAX_ROUTE_HOPS = int(_max_hops) if _max_hops else None

LOG_LEVEL = os.getenv("UBAHN_LOG_LEVEL", "INFO")

# HTTP server
API_HOST = os.getenv("UBAHN_API_HOST", "0.0.0.0")
API_PORT = int(os.getenv("UBAHN_API_PORT", "8000"))
