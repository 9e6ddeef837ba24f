"""
HTML email for the daily frost/freeze digest.

Alert text comes from the weather service and is untrusted: every
externally sourced field is escaped before it is embedded.
"""
from __future__ import annotations

import html
from datetime import date, datetime, timezone
from typing import Iterable, Optional
from urllib.parse import quote
from zoneinfo import ZoneInfo

from frostwatch.core.config import settings
from frostwatch.services.geocoding import Location

DETAILS_PREVIEW_CHARS = 300

_STYLE = """
    body { font-family: Arial, sans-serif; line-height: 1.6; color: #333; }
    .container { max-width: 600px; margin: 0 auto; padding: 20px; }
    .header { background: linear-gradient(135deg, #667eea 0%, #764ba2 100%); color: white; padding: 30px; text-align: center; border-radius: 8px 8px 0 0; }
    .content { background: #f7fafc; padding: 30px; border-radius: 0 0 8px 8px; }
    .alert-box { background: white; border-left: 4px solid #f56565; padding: 20px; margin-bottom: 20px; border-radius: 4px; }
    .clear-box { background: white; border-left: 4px solid #48bb78; padding: 20px; border-radius: 4px; }
    .plain-english { background: #edf2f7; padding: 15px; border-radius: 4px; margin-top: 15px; }
    .footer { text-align: center; color: #718096; font-size: 12px; margin-top: 30px; padding-top: 20px; border-top: 1px solid #e2e8f0; }
    h1 { margin: 0; font-size: 28px; }
    h2 { color: #1a202c; margin-top: 0; }
    h3 { color: #2d3748; font-size: 16px; }
    .badge { display: inline-block; padding: 6px 12px; border-radius: 12px; font-size: 12px; font-weight: 600; }
    .badge-alert { background: #fee2e2; color: #991b1b; }
    .badge-clear { background: #d1fae5; color: #065f46; }
"""


def _esc(value) -> str:
    return html.escape(str(value or ""), quote=False)


def format_long_date(d: date) -> str:
    # e.g. "Monday, October 19, 2026"
    return f"{d:%A}, {d:%B} {d.day}, {d.year}"


def format_timestamp(raw: str | None, tz_name: str | None = None) -> str:
    if not raw:
        return "Unknown"
    s = raw
    if s.endswith("Z"):
        s = s[:-1] + "+00:00"
    try:
        dt = datetime.fromisoformat(s)
    except ValueError:
        return raw
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    local = dt.astimezone(ZoneInfo(tz_name or settings.display_timezone))
    hour = local.hour % 12 or 12
    return f"{local.month}/{local.day}/{local.year}, {hour}:{local:%M} {local:%p} {local:%Z}"


def official_details(props: dict) -> str:
    headline = props.get("headline")
    if headline:
        return headline
    description = props.get("description") or ""
    return description[:DETAILS_PREVIEW_CHARS] + "..."


def unsubscribe_url(email: str, base_url: str | None = None) -> str:
    base = (base_url or settings.app_base_url).rstrip("/")
    return f"{base}/unsubscribe?email={quote(email or '', safe='')}"


def build_subject(location: Location, alerts: list) -> str:
    where = f"{location.city}, {location.state}"
    if alerts:
        return f"⚠️ Frost/Freeze Alert for {where}"
    return f"✓ All Clear - No Frost/Freeze Alerts for {where}"


def _alert_card(props: dict, plain_english: str, tz_name: str | None) -> str:
    timing = f"<strong>Severity:</strong> {_esc(props.get('severity') or 'Unknown')} | "
    timing += f"<strong>Effective:</strong> {_esc(format_timestamp(props.get('effective'), tz_name))}"
    if props.get("expires"):
        timing += f" | <strong>Expires:</strong> {_esc(format_timestamp(props.get('expires'), tz_name))}"

    return f"""
      <div class="alert-box">
        <h2>{_esc(props.get('event'))}</h2>
        <div class="plain-english">
          <h3>💬 What This Means:</h3>
          <p>{_esc(plain_english)}</p>
        </div>
        <div style="margin-top: 15px;">
          <h3>Official Details:</h3>
          <p style="font-size: 14px;">{_esc(official_details(props))}</p>
        </div>
        <div style="margin-top: 15px; font-size: 13px; color: #718096;">
          {timing}
        </div>
      </div>
    """


def _all_clear_card() -> str:
    return """
      <div class="clear-box">
        <span class="badge badge-clear">✓ ALL CLEAR</span>
        <h2>No Frost or Freeze Alerts</h2>
        <p>There are currently no frost or freeze advisories, watches, or warnings in effect for your location.</p>
      </div>
    """


def render_alert_email(
    location: Location,
    alerts: Iterable[tuple[dict, str]],
    zip_code: str,
    recipient: str,
    today: Optional[date] = None,
    base_url: str | None = None,
    tz_name: str | None = None,
) -> str:
    """
    alerts: (alert properties, plain-English summary) pairs, already filtered.
    """
    alerts = list(alerts)
    if today is None:
        today = datetime.now(ZoneInfo(tz_name or settings.display_timezone)).date()

    if alerts:
        count = len(alerts)
        cards = f'<span class="badge badge-alert">⚠️ {count} ALERT{"S" if count > 1 else ""} ACTIVE</span>'
        cards += "".join(_alert_card(props, summary, tz_name) for props, summary in alerts)
    else:
        cards = _all_clear_card()

    return f"""<!DOCTYPE html>
<html>
<head>
  <meta charset="utf-8">
  <style>{_STYLE}</style>
</head>
<body>
  <div class="container">
    <div class="header">
      <h1>❄️ Frost &amp; Freeze Alert</h1>
      <p style="margin: 5px 0 0 0; opacity: 0.9;">{format_long_date(today)}</p>
    </div>
    <div class="content">
      <p style="font-size: 16px; margin-bottom: 20px;"><strong>Location:</strong> {_esc(location.city)}, {_esc(location.state)} ({_esc(zip_code)})</p>
      {cards}
      <div class="footer">
        <p>You're receiving this email because you subscribed to daily frost and freeze alerts.</p>
        <p style="margin-top: 10px;"><a href="{html.escape(unsubscribe_url(recipient, base_url), quote=True)}">Unsubscribe</a></p>
      </div>
    </div>
  </div>
</body>
</html>
"""
