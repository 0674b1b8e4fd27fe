"""Tests for negotiation configuration

Tests use # TEST###: comments for cross-tracking in TEST_CATALOG.md.
"""

import tempfile
from pathlib import Path

import pytest
from wdcaps.config import NegotiationConfig, find_root, package_version
from wdcaps.errors import ConfigError


# TEST150: Test defaults when nothing is configured
def test_defaults(monkeypatch):
    monkeypatch.delenv("WDCAPS_VENDOR_PREFIX", raising=False)
    monkeypatch.delenv("WDCAPS_ROOT_DIR", raising=False)
    config = NegotiationConfig()
    assert config.vendor_prefix == "appium"


# TEST151: Test environment variables are used when no argument is given
def test_environment(monkeypatch):
    monkeypatch.setenv("WDCAPS_VENDOR_PREFIX", "acme")
    monkeypatch.setenv("WDCAPS_ROOT_DIR", "/opt/acme")
    config = NegotiationConfig()
    assert config.vendor_prefix == "acme"
    assert config.root_dir == Path("/opt/acme")


# TEST152: Test explicit arguments win over the environment
def test_arguments_win(monkeypatch):
    monkeypatch.setenv("WDCAPS_VENDOR_PREFIX", "acme")
    config = NegotiationConfig(vendor_prefix="custom", root_dir="/srv")
    assert config.vendor_prefix == "custom"
    assert config.root_dir == Path("/srv")


# TEST153: Test builder methods
def test_builder_methods():
    config = NegotiationConfig().with_vendor_prefix("acme").with_root_dir("/srv")
    assert config.vendor_prefix == "acme"
    assert config.root_dir == Path("/srv")


# TEST154: Test invalid vendor prefixes are rejected
@pytest.mark.parametrize("prefix", ["", "acme:", "a:b"])
def test_invalid_prefix(prefix):
    with pytest.raises(ConfigError):
        NegotiationConfig(vendor_prefix=prefix)
    with pytest.raises(ConfigError):
        NegotiationConfig().with_vendor_prefix(prefix)


# TEST155: Test find_root locates the nearest pyproject.toml
def test_find_root():
    with tempfile.TemporaryDirectory() as temp_dir:
        root = Path(temp_dir).resolve()
        (root / "pyproject.toml").write_text("[project]\nname = 'x'\n", encoding="utf-8")
        nested = root / "src" / "pkg"
        nested.mkdir(parents=True)
        module = nested / "mod.py"
        module.write_text("", encoding="utf-8")

        assert find_root(module) == root
        assert find_root(nested) == root


# TEST156: Test find_root fails when no pyproject.toml exists above start
def test_find_root_missing(monkeypatch):
    monkeypatch.setattr("wdcaps.config.ROOT_MARKER", "no-such-marker.toml")
    with tempfile.TemporaryDirectory() as temp_dir:
        with pytest.raises(ConfigError):
            find_root(temp_dir)


# TEST157: Test package_version of installed and missing distributions
def test_package_version():
    assert package_version("pytest") == pytest.__version__
    assert package_version("definitely-not-an-installed-distribution") is None
