"""
Active frost/freeze alert lookup for a ZIP code.

ZIP -> Location (Geocoder) -> NWS point metadata -> forecast zone ->
active alerts for that zone -> keyword filter. The NWS API rejects
requests without a User-Agent, so every call carries one.
"""
from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Optional

import httpx

from frostwatch.core.config import settings
from frostwatch.core.errors import LookupFailure
from frostwatch.metrics.prometheus import upstream_request_latency_seconds
from frostwatch.services.alert_filter import filter_frost_freeze_alerts
from frostwatch.services.geocoding import Geocoder, Location

log = logging.getLogger(__name__)


@dataclass
class AlertLookup:
    location: Optional[Location] = None
    alerts: list[dict] = field(default_factory=list)


def zone_id_from_url(forecast_zone: str) -> str:
    # "https://api.weather.gov/zones/forecast/ILZ014" -> "ILZ014"
    return forecast_zone.rstrip("/").split("/")[-1]


class AlertFetcher:
    def __init__(
        self,
        client: httpx.Client,
        geocoder: Geocoder | None = None,
        base_url: str | None = None,
        user_agent: str | None = None,
    ):
        self.client = client
        self.geocoder = geocoder or Geocoder(client)
        self.base_url = (base_url or settings.nws_base_url).rstrip("/")
        self.headers = {
            "User-Agent": user_agent or settings.nws_user_agent,
            "Accept": "application/geo+json",
        }

    def _get_json(self, url: str, service: str, params: dict | None = None) -> dict[str, Any]:
        start = time.perf_counter()
        try:
            r = self.client.get(url, params=params, headers=self.headers)
            if r.status_code >= 400:
                raise LookupFailure(f"{service} returned HTTP {r.status_code}")
            data = r.json()
        except httpx.HTTPError as e:
            raise LookupFailure(f"{service} request failed: {e}") from e
        except ValueError as e:
            raise LookupFailure(f"{service} returned invalid JSON") from e
        finally:
            upstream_request_latency_seconds.labels(service=service).observe(time.perf_counter() - start)

        if not isinstance(data, dict):
            raise LookupFailure(f"{service} returned {type(data).__name__}, expected an object")
        return data

    def forecast_zone(self, location: Location) -> str:
        url = f"{self.base_url}/points/{location.latitude:.4f},{location.longitude:.4f}"
        data = self._get_json(url, "nws_points")
        properties = data.get("properties")
        zone = properties.get("forecastZone") if isinstance(properties, dict) else None
        if not zone or not isinstance(zone, str):
            raise LookupFailure(f"No forecast zone for {location.latitude:.4f},{location.longitude:.4f}")
        return zone

    def active_alerts(self, zone_id: str) -> list[dict]:
        data = self._get_json(f"{self.base_url}/alerts/active", "nws_alerts", params={"zone": zone_id})
        features = data.get("features") or []
        if not isinstance(features, list):
            raise LookupFailure("nws_alerts returned malformed features")

        alerts = []
        for f in features:
            props = f.get("properties") if isinstance(f, dict) else None
            if not isinstance(props, dict):
                raise LookupFailure("nws_alerts returned a malformed alert record")
            alerts.append(props)
        return alerts

    def lookup(self, zip_code: str) -> AlertLookup:
        """
        Never raises: any lookup failure is logged and reported as an empty
        result so the caller can skip this ZIP for the current run.
        """
        try:
            location = self.geocoder.lookup(zip_code)
            zone_id = zone_id_from_url(self.forecast_zone(location))
            alerts = self.active_alerts(zone_id)
        except LookupFailure as e:
            log.error("Alert lookup failed", extra={"zip_code": zip_code, "error": str(e)})
            return AlertLookup()

        matched = filter_frost_freeze_alerts(alerts)
        log.info(
            "Alert lookup complete",
            extra={"zip_code": zip_code, "zone": zone_id, "active": len(alerts), "matched": len(matched)},
        )
        return AlertLookup(location=location, alerts=matched)
