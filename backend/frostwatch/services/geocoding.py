from __future__ import annotations

import logging
import time
from dataclasses import dataclass

import httpx

from frostwatch.core.config import settings
from frostwatch.core.errors import LookupFailure
from frostwatch.metrics.prometheus import upstream_request_latency_seconds

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Location:
    latitude: float
    longitude: float
    city: str
    state: str


class Geocoder:
    """Resolves a 5-digit ZIP code through the Zippopotam.us lookup service."""

    def __init__(self, client: httpx.Client, base_url: str | None = None):
        self.client = client
        self.base_url = (base_url or settings.zippopotam_base_url).rstrip("/")

    def lookup(self, zip_code: str) -> Location:
        url = f"{self.base_url}/{zip_code}"
        start = time.perf_counter()
        try:
            r = self.client.get(url)
            if r.status_code >= 400:
                raise LookupFailure(f"ZIP lookup for {zip_code} returned HTTP {r.status_code}")
            data = r.json()
        except httpx.HTTPError as e:
            log.warning("ZIP lookup failed", extra={"zip_code": zip_code, "error": str(e)})
            raise LookupFailure(f"ZIP lookup for {zip_code} failed: {e}") from e
        except ValueError as e:
            raise LookupFailure(f"ZIP lookup for {zip_code} returned invalid JSON") from e
        finally:
            upstream_request_latency_seconds.labels(service="zippopotam").observe(time.perf_counter() - start)

        places = data.get("places") if isinstance(data, dict) else None
        if not places or not isinstance(places, list):
            raise LookupFailure(f"No places found for ZIP {zip_code}")

        place = places[0]
        if not isinstance(place, dict):
            raise LookupFailure(f"Malformed place record for ZIP {zip_code}")
        try:
            return Location(
                latitude=float(place["latitude"]),
                longitude=float(place["longitude"]),
                city=place.get("place name") or "",
                state=place.get("state abbreviation") or "",
            )
        except (KeyError, TypeError, ValueError) as e:
            raise LookupFailure(f"Malformed place record for ZIP {zip_code}") from e
