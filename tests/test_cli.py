"""
Tests for the command line utility.
"""

import json

import pytest

from embedstore.cli import main


@pytest.fixture
def run(store_dir):
    def _run(*args):
        return main(["--store", "cli", "--store-dir", store_dir, "--provider", "char", "--dimension", "4", *args])
    return _run


def test_add_search_count(run, capsys):
    assert run("add", "a", "cat") == 0
    assert run("add", "b", "dog") == 0
    assert run("add", "c", "car") == 0
    capsys.readouterr()

    assert run("search", "feline", "-k", "2") == 0
    lines = capsys.readouterr().out.strip().splitlines()
    assert [line.split("\t")[1] for line in lines] == ["b", "c"]

    assert run("count") == 0
    assert capsys.readouterr().out.strip() == "3"


def test_delete_clear_compact(run, capsys):
    run("add", "a", "cat")
    run("add", "b", "dog")

    assert run("delete", "a") == 0
    assert run("compact") == 0
    assert run("clear") == 0
    capsys.readouterr()

    run("count")
    assert capsys.readouterr().out.strip() == "0"


def test_health(run, capsys):
    run("add", "a", "cat")
    capsys.readouterr()

    assert run("health") == 0
    health = json.loads(capsys.readouterr().out)
    assert health["size"] == 1
    assert health["dimension"] == 4


def test_add_empty_text_fails(run, capsys):
    assert run("add", "a", "") == 1
    assert "rejected" in capsys.readouterr().out


def test_unknown_provider(store_dir, capsys):
    code = main(["--store-dir", store_dir, "--provider", "word2vec", "count"])

    assert code == 1
    assert "Unknown embedding provider" in capsys.readouterr().err


def test_invalid_store_name(store_dir, capsys):
    code = main(["--store", "bad/name", "--store-dir", store_dir, "--provider", "char", "--dimension", "4", "count"])

    assert code == 1
    assert "could not be initialized" in capsys.readouterr().err
