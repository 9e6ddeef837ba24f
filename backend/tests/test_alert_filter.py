import pytest

from frostwatch.services.alert_filter import filter_frost_freeze_alerts, is_frost_freeze_alert


def test_only_freeze_alert_survives():
    winter = {"event": "Winter Storm Warning", "headline": "Heavy snow expected", "description": "Snow 6 to 10 inches."}
    freeze = {"event": "Freeze Warning", "headline": "Freeze Warning in effect", "description": "Sub-freezing lows."}
    assert filter_frost_freeze_alerts([winter, freeze]) == [freeze]


@pytest.mark.parametrize(
    "props",
    [
        {"event": "Frost Advisory"},
        {"event": "Special Weather Statement", "headline": "Patchy FROST possible late tonight"},
        {"event": "Special Weather Statement", "description": "Freezing fog may glaze bridges."},
        {"event": "Hard Freeze Watch"},
        {"event": "Agricultural Statement", "description": "A killing frost is expected."},
    ],
)
def test_keyword_in_any_field_matches(props):
    assert is_frost_freeze_alert(props)


def test_missing_fields_do_not_match():
    assert not is_frost_freeze_alert({"event": "Heat Advisory", "headline": None})
    assert not is_frost_freeze_alert({})


def test_upstream_order_is_preserved():
    alerts = [
        {"event": "Freeze Watch"},
        {"event": "Flood Watch"},
        {"event": "Frost Advisory"},
        {"event": "Freeze Warning"},
    ]
    assert [a["event"] for a in filter_frost_freeze_alerts(alerts)] == ["Freeze Watch", "Frost Advisory", "Freeze Warning"]
