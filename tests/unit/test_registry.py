"""
Unit tests for registry.py.

Covers filename classification, the excluded passcodes, registry insertion
and the bounded folder scan.
"""

from pathlib import Path

import pytest

from script_checker.errors import MissingBaseScriptsError, ScriptFolderError
from script_checker.registry import (
    ScriptRegistry,
    classify,
    is_card_candidate,
    is_excluded_code,
    parse_card_code,
    scan,
    scan_folder,
)
from script_checker.types import ScriptKind


# =============================================================================
# CLASSIFICATION
# =============================================================================

class TestParseCardCode:

    @pytest.mark.parametrize("name,expected", [
        ("c4.lua", 4),
        ("c60764609.lua", 60764609),
        ("c0.lua", 0),
        ("c007.lua", 7),
        ("c4294967295.lua", 0xFFFFFFFF),
    ])
    def test_valid_codes(self, name, expected):
        assert parse_card_code(name) == expected

    @pytest.mark.parametrize("name", [
        "c.lua",            # empty remainder
        "c12abc.lua",       # trailing garbage
        "c+12.lua",         # sign
        "c 12.lua",         # whitespace
        "c-1.lua",
        "c4294967296.lua",  # overflow
        "cards.lua",
        "utility.lua",
        "c12.txt",
        "c12.LUA",
        "C12.lua",
    ])
    def test_rejects_malformed(self, name):
        assert parse_card_code(name) is None

    def test_unicode_digits_rejected(self):
        assert parse_card_code("c١٢.lua") is None

    def test_uses_only_filename(self):
        assert parse_card_code("official/c123.lua") == 123
        assert parse_card_code(Path("/nowhere/c99.lua")) == 99

    def test_candidate_requires_leading_c_and_lua(self):
        assert is_card_candidate("cfoo.lua")
        assert not is_card_candidate("foo.lua")
        assert not is_card_candidate("c1.lua.bak")
        assert not is_card_candidate("")


class TestExclusion:

    @pytest.mark.parametrize("code", [419, 420, 421, 422, 151000000])
    def test_excluded(self, code):
        assert is_excluded_code(code)

    @pytest.mark.parametrize("code", [0, 418, 423, 150999999, 151000001, 60764609])
    def test_not_excluded(self, code):
        assert not is_excluded_code(code)


class TestClassify:

    def test_card(self):
        result = classify("c4.lua")
        assert result.kind is ScriptKind.CARD
        assert result.code == 4
        assert result.key is None

    def test_excluded_code_is_utility(self):
        result = classify("c419.lua")
        assert result.kind is ScriptKind.UTILITY
        assert result.key == "c419.lua"

    def test_unparseable_lua_is_utility(self):
        result = classify("cards_common.lua")
        assert result.kind is ScriptKind.UTILITY
        assert result.key == "cards_common.lua"

    def test_utility_keyed_by_full_filename(self):
        assert classify("/scripts/official/utility.lua").key == "utility.lua"

    @pytest.mark.parametrize("name", ["c4.txt", "README.md", "cards.cdb", "c4", ".lua"])
    def test_ignored(self, name):
        assert classify(name).kind is ScriptKind.IGNORED


# =============================================================================
# REGISTRY
# =============================================================================

class TestScriptRegistry:

    def test_first_registration_wins(self, tmp_path):
        registry = ScriptRegistry()
        first = tmp_path / "a" / "c4.lua"
        second = tmp_path / "b" / "c4.lua"
        registry.add(first)
        registry.add(second)
        assert registry.by_code == {4: first}

    def test_first_utility_wins(self, tmp_path):
        registry = ScriptRegistry()
        registry.add(tmp_path / "a" / "utility.lua")
        registry.add(tmp_path / "b" / "utility.lua")
        assert registry.by_name["utility.lua"] == tmp_path / "a" / "utility.lua"

    def test_ignored_files_not_added(self, tmp_path):
        registry = ScriptRegistry()
        registry.add(tmp_path / "notes.txt")
        assert len(registry) == 0

    def test_resolve_card_and_utility(self, tmp_path):
        registry = ScriptRegistry()
        card = tmp_path / "c10.lua"
        excluded = tmp_path / "c420.lua"
        utility = tmp_path / "utility.lua"
        for path in (card, excluded, utility):
            registry.add(path)
        assert registry.resolve("c10.lua") == card
        assert registry.resolve("c420.lua") == excluded
        assert registry.resolve("utility.lua") == utility
        assert registry.resolve("c11.lua") is None
        assert registry.resolve("proc_fusion.lua") is None

    def test_cards_in_ascending_order(self, tmp_path):
        registry = ScriptRegistry()
        for code in (300, 5, 42):
            registry.add(tmp_path / f"c{code}.lua")
        assert [code for code, _ in registry.cards()] == [5, 42, 300]

    def test_merge_keeps_existing(self, tmp_path):
        left = ScriptRegistry()
        left.add(tmp_path / "x" / "c1.lua")
        right = ScriptRegistry()
        right.add(tmp_path / "y" / "c1.lua")
        right.add(tmp_path / "y" / "c2.lua")
        left.merge(right)
        assert left.by_code == {1: tmp_path / "x" / "c1.lua", 2: tmp_path / "y" / "c2.lua"}

    def test_base_scripts(self, tmp_path):
        registry = ScriptRegistry()
        registry.add(tmp_path / "constant.lua")
        registry.add(tmp_path / "utility.lua")
        assert registry.base_scripts() == (tmp_path / "constant.lua", tmp_path / "utility.lua")

    @pytest.mark.parametrize("present", ["constant.lua", "utility.lua"])
    def test_base_scripts_missing(self, tmp_path, present):
        registry = ScriptRegistry()
        registry.add(tmp_path / present)
        with pytest.raises(MissingBaseScriptsError):
            registry.base_scripts()


# =============================================================================
# SCANNING
# =============================================================================

class TestScan:

    def test_example_folder(self, tmp_path, write):
        for name in ("c4.lua", "c419.lua", "utility.lua", "constant.lua"):
            write(tmp_path, name)

        registry = scan([tmp_path])

        assert registry.by_code == {4: tmp_path / "c4.lua"}
        assert registry.by_name == {
            "c419.lua": tmp_path / "c419.lua",
            "utility.lua": tmp_path / "utility.lua",
            "constant.lua": tmp_path / "constant.lua",
        }

    def test_one_level_of_subfolders(self, tmp_path, write):
        write(tmp_path, "official/c1.lua")
        write(tmp_path, "official/nested/c2.lua")
        write(tmp_path, "official/nested/deeper/c3.lua")

        registry = scan([tmp_path])

        assert set(registry.by_code) == {1}

    def test_hidden_folders_pruned(self, tmp_path, write):
        write(tmp_path, ".git/c1.lua")
        write(tmp_path, ".git/utility.lua")
        write(tmp_path, "official/.cache/c2.lua")
        write(tmp_path, "official/c3.lua")

        registry = scan([tmp_path])

        assert set(registry.by_code) == {3}
        assert registry.by_name == {}

    def test_same_root_twice_is_idempotent(self, tmp_path, write):
        write(tmp_path, "c1.lua")
        write(tmp_path, "utility.lua")
        write(tmp_path, "sub/c2.lua")

        once = scan([tmp_path])
        twice = scan([tmp_path, tmp_path])

        assert once == twice

    def test_multiple_roots_merge(self, tmp_path, write):
        write(tmp_path, "a/c1.lua")
        write(tmp_path, "b/c1.lua")
        write(tmp_path, "b/c2.lua")

        registry = scan([tmp_path / "a", tmp_path / "b"])

        assert registry.by_code == {1: tmp_path / "a" / "c1.lua", 2: tmp_path / "b" / "c2.lua"}

    def test_no_roots_scans_current_directory(self, tmp_path, write, monkeypatch):
        write(tmp_path, "c77.lua")
        monkeypatch.chdir(tmp_path)

        registry = scan([])

        assert set(registry.by_code) == {77}

    def test_missing_root(self, tmp_path):
        with pytest.raises(ScriptFolderError):
            scan_folder(tmp_path / "does-not-exist")

    def test_logs_found_folders(self, tmp_path, write, caplog):
        write(tmp_path, "official/c1.lua")
        write(tmp_path, ".hidden/c2.lua")

        with caplog.at_level("INFO", logger="script_checker.registry"):
            scan([tmp_path])

        assert f"Found script folder {tmp_path / 'official'}" in caplog.messages
        assert not any(".hidden" in message for message in caplog.messages)
