import logging

import pytest

from debug import Debug


@pytest.fixture
def dbg():
    d = Debug()
    yield d
    d.disable(*d.status())
    d.toggle_global(True)


def test_components_off_by_default(dbg: Debug) -> None:
    assert not any(dbg.status().values())


def test_enable_is_shared_between_instances(dbg: Debug) -> None:
    dbg.enable("rotor")
    assert Debug().status()["rotor"] is True


def test_unknown_component(dbg: Debug) -> None:
    with pytest.raises(ValueError):
        dbg.enable("flux")


def test_log_respects_switches(dbg: Debug, caplog) -> None:
    caplog.set_level(logging.DEBUG, logger="ENIGMA")
    dbg.log("machine", "hidden")
    dbg.enable("machine")
    dbg.log("machine", "shown")
    dbg.toggle_global(False)
    dbg.log("machine", "muted")
    messages = [r.getMessage() for r in caplog.records]
    assert messages == ["[MACHINE] shown"]


def test_toggle(dbg: Debug) -> None:
    dbg.toggle("config")
    assert dbg.status()["config"]
    dbg.toggle("config")
    assert not dbg.status()["config"]
