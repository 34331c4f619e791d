"""
Adapters package for the Gateway Service.

Contains the HTTP client wrapper for the upstream product/order service.
The adapter encapsulates:

- Base URL and request shapes
- The bounded per-call timeout
- Mapping transport failures onto shared errors

Keep adapters thin and side-effect free outside of explicit calls.
"""

from .upstream_client import UpstreamClient, UpstreamResponse

__all__ = [
    "UpstreamClient",
    "UpstreamResponse",
]
