"""
Upstream API package.

Single outbound client for the geocoding, weather, business, movie and
trail APIs. Credentials come from settings, never from callers.
"""

from services.explorer.upstream.client import UPSTREAMS, Upstream, UpstreamClient

__all__ = ["UPSTREAMS", "Upstream", "UpstreamClient"]
