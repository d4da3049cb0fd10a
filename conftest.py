"""Configures pytest further."""
import pytest

OPTIONS = {
    # marker: (option, skip when option set, reason)
    "slow": ("--skip-slow", True, "Slow test: needs no --skip-slow option"),
    "extreme": ("--run-extreme", False, "Extreme test: needs --run-extreme option"),
}


def pytest_addoption(parser):
    parser.addoption("--skip-slow", action="store_true", default=False, help="skip slower tests")
    parser.addoption("--run-extreme", action="store_true", default=False, help="run exhaustive full-modulus tests")


def pytest_collection_modifyitems(config, items):
    skipdict = {}
    for marker, (option, skip_when_set, reason) in OPTIONS.items():
        if config.getoption(option) == skip_when_set:
            skipdict[marker] = pytest.mark.skip(reason=reason)
    if not skipdict:
        return
    for item in items:
        for k, v in skipdict.items():
            if k in item.keywords:
                item.add_marker(v)
