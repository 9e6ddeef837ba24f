"""
Plain-English advice for frost/freeze alerts.

Rules are matched against the lower-cased event name in list order and the
first hit wins. A trigger phrase that contains another rule's phrase must be
listed before it ("hard freeze warning" before "freeze warning").
"""
from __future__ import annotations

import re
from typing import Callable, Optional

TEMPERATURE_RE = re.compile(r"(\d+)\s*(?:degrees?|°)", re.IGNORECASE)


def extract_temperature(description: str | None) -> Optional[str]:
    m = TEMPERATURE_RE.search(description or "")
    return m.group(1) if m else None


def _hard_freeze(temp: Optional[str]) -> str:
    around = f" (around {temp}°F)" if temp else ""
    return (
        f"Hard freeze coming - very cold! Temperatures will fall well below 32°F{around}. "
        "This will kill most vegetation and can burst pipes. "
        "Take immediate action to protect plants and plumbing."
    )


def _freeze_warning(temp: Optional[str]) -> str:
    around = f" (around {temp}°F)" if temp else ""
    return (
        f"Freezing conditions expected. Temperatures will drop below 32°F{around}. "
        "This can kill sensitive plants and damage exposed pipes. "
        "Bring plants indoors, cover outdoor faucets, and let faucets drip to prevent freezing."
    )


def _frost_advisory(temp: Optional[str]) -> str:
    return (
        "Frost is likely to form. Temperatures will drop to around 32-36°F. "
        "Tender plants may be damaged. Cover or bring in sensitive plants overnight."
    )


def _freeze_watch(temp: Optional[str]) -> str:
    low = f" (possibly as low as {temp}°F)" if temp else ""
    return (
        f"Freezing conditions are possible. There's a chance temperatures could drop below 32°F{low}. "
        "Start preparing - monitor forecasts and be ready to protect plants and pipes."
    )


def _cold_weather(temp: Optional[str]) -> str:
    return (
        "Cold weather alert. Temperatures will drop significantly. "
        "Take precautions to protect plants, pipes, and outdoor equipment."
    )


SUMMARY_RULES: list[tuple[str, Callable[[Optional[str]], str]]] = [
    ("hard freeze warning", _hard_freeze),
    ("freeze warning", _freeze_warning),
    ("frost advisory", _frost_advisory),
    ("freeze watch", _freeze_watch),
]


def summarize_alert(props: dict) -> str:
    event = (props.get("event") or "").lower()
    temp = extract_temperature(props.get("description"))

    for phrase, template in SUMMARY_RULES:
        if phrase in event:
            return template(temp)
    return _cold_weather(temp)
