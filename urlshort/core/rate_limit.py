"""
Rate Limiting Configuration

Per-IP rate limits for the endpoints of the fallback application, using
slowapi. Redirects served from the exact-match and structured handlers
are answered before the application is reached and are not limited.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

limiter = Limiter(key_func=get_remote_address)

# Format: "count/period" (e.g., "10/minute" means 10 requests per minute)
RATE_LIMITS = {
    "create": "10/minute",  # Redirect creation: 10 per minute per IP
    "redirect": "100/minute",  # Database-backed redirects: 100 per minute per IP
    "list": "30/minute",  # Listing redirects: 30 per minute per IP
}
