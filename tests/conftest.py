"""Shared pytest fixtures for script-checker tests."""

import pytest
from pathlib import Path
from types import SimpleNamespace

from script_checker import bridge
from script_checker.types import LogType


# Card passcodes used across tests
ENGRAVER = 60764609
REQUIEM = 2463794
CAESAR = 79559912


class FakeDuel:
    """Stand-in for an OCG_Duel handle."""


class FakeCore:
    """In-process engine with the same methods as OcgCore.

    Behaves like ygopro-core from the checker's point of view: new_card()
    asks for the card's data and script, load_script() may request further
    scripts and may emit diagnostics.

    Args:
        version: Reported (major, minor)
        creation_status: Value returned by create_duel()
        produce_handle: Whether create_duel() hands out a duel handle
        rejected: Script names load_script() refuses
        dependencies: Script name -> names requested while loading it
        logs: Script name -> (message, log_type) pairs emitted while loading it
    """

    def __init__(self, version=(11, 0), creation_status=0, produce_handle=True,
                 rejected=(), dependencies=None, logs=None):
        self.version = version
        self.creation_status = creation_status
        self.produce_handle = produce_handle
        self.rejected = set(rejected)
        self.dependencies = dependencies or {}
        self.logs = logs or {}
        self.context = None
        self.loaded = []
        self.sources = {}
        self.cards = []
        self.card_data = []
        self.destroyed = []

    def get_version(self):
        return self.version

    def create_duel(self, context):
        self.context = context
        duel = FakeDuel() if self.produce_handle else None
        return self.creation_status, duel

    def destroy_duel(self, duel):
        self.destroyed.append(duel)

    def load_script(self, duel, source, name):
        self.loaded.append(name)
        self.sources[name] = source
        for dependency in self.dependencies.get(name, ()):
            self.context.guard(bridge.read_script, duel, dependency, default=False)
        for message, log_type in self.logs.get(name, ()):
            self.context.guard(bridge.handle_log, message, log_type)
        return name not in self.rejected

    def new_card(self, duel, info):
        self.cards.append(info)
        data = SimpleNamespace(code=None)
        self.context.guard(bridge.read_card, info.code, data)
        self.card_data.append(data)
        self.context.guard(bridge.read_script, duel, f"c{info.code}.lua", default=False)


def write_script(root: Path, name: str, source: str = "-- script\n") -> Path:
    path = root / name
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(source)
    return path


@pytest.fixture
def make_core():
    """Factory for FakeCore instances."""
    return FakeCore


@pytest.fixture
def script_dir(tmp_path):
    """Script folder with base scripts and three independent cards."""
    write_script(tmp_path, "constant.lua", "LOCATION_DECK=0x01\n")
    write_script(tmp_path, "utility.lua", "Auxiliary={}\n")
    for code in (ENGRAVER, REQUIEM, CAESAR):
        write_script(tmp_path, f"c{code}.lua", f"local s,id=GetID()\n-- {code}\n")
    return tmp_path


@pytest.fixture
def script_log_error():
    """A script-originated diagnostic."""
    return ("attempt to call a nil value", int(LogType.FROM_SCRIPT))


@pytest.fixture
def write():
    """Helper that writes a script file below a folder and returns its path."""
    return write_script
