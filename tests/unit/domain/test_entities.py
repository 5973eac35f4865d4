"""Tests for domain entities."""

import dataclasses
import logging

import pytest

from pushguard.domain.entities import Addition, ChangeSet, FileReadError
from pushguard.domain.exceptions import InvalidPatternError
from pushguard.domain.value_objects import FilePath, PathPattern


def test_addition_derives_name_from_path():
    addition = Addition.create("deep/nested/id_rsa", b"key")
    assert addition.path == "deep/nested/id_rsa"
    assert addition.name == "id_rsa"
    assert addition.data == b"key"


def test_addition_name_for_top_level_file():
    assert Addition.create("a.txt", b"").name == "a.txt"


def test_addition_is_immutable():
    addition = Addition.create("a.txt", b"x")
    with pytest.raises(dataclasses.FrozenInstanceError):
        addition.path = FilePath("b.txt")  # type: ignore[misc]


def test_addition_name_cannot_be_passed():
    with pytest.raises(TypeError):
        Addition(path=FilePath("a.txt"), data=b"", name="b.txt")  # type: ignore[call-arg]


def test_addition_equality():
    assert Addition.create("a/b.txt", b"1") == Addition.create("a/b.txt", b"1")
    assert Addition.create("a/b.txt", b"1") != Addition.create("a/b.txt", b"2")


def test_content_hash_is_deterministic():
    first = Addition.create("a.txt", b"content").content_hash
    second = Addition.create("other.txt", b"content").content_hash
    assert first == second
    assert len(first) == 64
    assert first != Addition.create("a.txt", b"other").content_hash


class TestAdditionMatches:
    """Tests for Addition.matches across the three strategies."""

    def test_directory_prefix(self):
        addition = Addition.create("src/secrets/key.pem", b"")
        assert addition.matches("src/secrets/")
        assert not addition.matches("secrets/")

    def test_scoped_glob(self):
        addition = Addition.create("a/b/c.txt", b"")
        assert addition.matches("a/*/c.txt")
        assert not addition.matches("a/*/d.txt")

    def test_basename_glob(self):
        assert Addition.create("deep/nested/id_rsa", b"").matches("id_rsa")
        assert not Addition.create("other/id_rsa.pub", b"").matches("id_rsa")

    def test_accepts_parsed_pattern(self):
        addition = Addition.create("c/d.pem", b"")
        assert addition.matches(PathPattern.parse("*.pem"))

    def test_malformed_glob_is_no_match(self):
        addition = Addition.create("[abc", b"")
        assert addition.matches("[abc") is False

    def test_empty_pattern_raises(self):
        with pytest.raises(InvalidPatternError):
            Addition.create("a.txt", b"").matches("")

    def test_logs_match_outcome_at_debug(self, caplog):
        addition = Addition.create("c/d.pem", b"")
        with caplog.at_level(logging.DEBUG, logger="pushguard"):
            addition.matches("*.pem")

        messages = [r.getMessage() for r in caplog.records]
        assert any("pattern=*.pem" in m and "path=c/d.pem" in m and "match=True" in m for m in messages)

    def test_uses_injected_logger(self, caplog):
        log = logging.getLogger("test.matcher")
        with caplog.at_level(logging.DEBUG, logger="test.matcher"):
            Addition.create("a.txt", b"").matches("*.txt", log)

        assert [r.name for r in caplog.records] == ["test.matcher"]


class TestChangeSet:
    def test_sequence_behaviour(self):
        additions = (Addition.create("a.txt", b"a"), Addition.create("c/d.pem", b"d"))
        change_set = ChangeSet("v1", "v2", ".", additions=additions)

        assert len(change_set) == 2
        assert list(change_set) == list(additions)
        assert change_set[1].name == "d.pem"
        assert change_set.paths() == ["a.txt", "c/d.pem"]

    def test_empty_change_set_is_valid(self):
        change_set = ChangeSet("v1", "v1", ".")
        assert len(change_set) == 0
        assert change_set.complete

    def test_range_expression(self):
        assert ChangeSet("origin/master", "master", ".").range == "origin/master..master"

    def test_read_errors_mark_incomplete(self):
        change_set = ChangeSet(
            "v1",
            "v2",
            ".",
            additions=(Addition.create("gone.txt", b""),),
            read_errors=(FileReadError(FilePath("gone.txt"), "No such file"),),
        )
        assert not change_set.complete
