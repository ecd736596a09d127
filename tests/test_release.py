"""Tests for release name derivation."""

import pytest

from doop_git.core.release import WORDS, release_name


def test_release_name_is_deterministic():
    full_hash = "3f2a9c1d0b8e7f6a5c4d3e2f1a0b9c8d7e6f5a4b"
    assert release_name(full_hash) == release_name(full_hash)


def test_release_name_is_alliterative_title_case():
    """Test the shape of generated names over a range of hashes."""
    for i in range(50):
        name = release_name(f"{i:040x}")
        adjective, noun = name.split(" ")

        assert name == name.title()
        assert adjective[0] == noun[0]
        assert adjective.lower() in WORDS[adjective[0].lower()][0]
        assert noun.lower() in WORDS[noun[0].lower()][1]


def test_release_name_varies_with_hash():
    names = {release_name(f"{i:040x}") for i in range(50)}
    assert len(names) > 1


def test_release_name_requires_hash():
    with pytest.raises(ValueError):
        release_name("")
