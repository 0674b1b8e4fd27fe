"""Tests for vendor prefix handling

Tests use # TEST###: comments for cross-tracking in TEST_CATALOG.md.
"""

import pytest
from wdcaps.prefix import (
    STANDARD_CAPS,
    W3C_APPIUM_PREFIX,
    insert_prefixes,
    remove_prefix,
    remove_prefixes,
)


# TEST001: Test non-standard capability names get the appium prefix
def test_001_insert_prefixes_non_standard():
    assert insert_prefixes({"deviceName": "emu"}) == {"appium:deviceName": "emu"}


# TEST002: Test standard capability names stay unprefixed
@pytest.mark.parametrize("name", STANDARD_CAPS)
def test_002_insert_prefixes_standard(name):
    assert insert_prefixes({name: "x"}) == {name: "x"}


# TEST003: Test names already carrying a vendor prefix are left alone
def test_003_insert_prefixes_already_namespaced():
    caps = {"goog:chromeOptions": {"args": []}, "appium:app": "/tmp/app.apk"}
    assert insert_prefixes(caps) == caps


# TEST004: Test insert_prefixes does not mutate its argument
def test_004_insert_prefixes_pure():
    caps = {"udid": "123", "platformName": "Android"}
    insert_prefixes(caps)
    assert caps == {"udid": "123", "platformName": "Android"}


# TEST005: Test prefix insertion followed by removal restores the names
def test_005_prefix_round_trip():
    caps = {"automationName": "UiAutomator2", "newCommandTimeout": 60}
    assert remove_prefixes(insert_prefixes(caps)) == caps


# TEST006: Test remove_prefixes is idempotent on unprefixed dicts
def test_006_remove_prefixes_idempotent():
    caps = {"platformName": "iOS", "deviceName": "iPhone"}
    assert remove_prefixes(caps) == caps
    assert remove_prefixes(remove_prefixes(caps)) == caps


# TEST007: Test other vendor prefixes are not stripped
def test_007_remove_prefixes_other_vendor():
    caps = {"appium:udid": "1", "goog:chromeOptions": {}}
    assert remove_prefixes(caps) == {"udid": "1", "goog:chromeOptions": {}}


# TEST008: Test nested dictionaries are not unprefixed
def test_008_remove_prefixes_top_level_only():
    caps = {"appium:options": {"appium:nested": True}}
    assert remove_prefixes(caps) == {"options": {"appium:nested": True}}


# TEST009: Test non-dict input is returned unchanged
@pytest.mark.parametrize("value", [None, "appium:udid", 42, ["appium:udid"]])
def test_009_remove_prefixes_non_dict(value):
    assert remove_prefixes(value) is value


# TEST010: Test remove_prefix only strips an exact leading prefix
def test_010_remove_prefix_single_key():
    assert remove_prefix("appium:udid") == "udid"
    assert remove_prefix("udid") == "udid"
    assert remove_prefix("xappium:udid") == "xappium:udid"
    assert remove_prefix("appiumudid") == "appiumudid"


# TEST011: Test a custom vendor prefix
def test_011_custom_prefix():
    assert W3C_APPIUM_PREFIX == "appium"
    assert insert_prefixes({"udid": "1"}, prefix="acme") == {"acme:udid": "1"}
    assert remove_prefixes({"acme:udid": "1", "appium:app": "a"}, prefix="acme") == {
        "udid": "1",
        "appium:app": "a",
    }
