from typing import Iterable

FROST_FREEZE_KEYWORDS = ("frost", "freeze", "freezing", "hard freeze", "killing frost")


def is_frost_freeze_alert(props: dict) -> bool:
    event = (props.get("event") or "").lower()
    headline = (props.get("headline") or "").lower()
    description = (props.get("description") or "").lower()

    return any(
        keyword in event or keyword in headline or keyword in description
        for keyword in FROST_FREEZE_KEYWORDS
    )


def filter_frost_freeze_alerts(alerts: Iterable[dict]) -> list[dict]:
    # NWS ordering is kept as-is
    return [a for a in alerts if is_frost_freeze_alert(a)]
