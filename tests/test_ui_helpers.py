"""Test the searchable selection prompt."""

from unittest.mock import patch

import pytest
from rich.console import Console

from npmmenu.rich_utils.ui_helpers import choose, filter_options, get_console

OPTIONS = ["express", "jest (dev)", "eslint (dev)", "react (peer)"]


@pytest.fixture
def console():
    return Console(record=True, width=80)


def answers(*values):
    return patch("npmmenu.rich_utils.ui_helpers.Prompt.ask", side_effect=list(values))


def test_filter_options_case_insensitive():
    assert filter_options(OPTIONS, "DEV") == ["jest (dev)", "eslint (dev)"]


def test_choose_by_number(console):
    with answers("2"):
        assert choose(console, "Dependencies", OPTIONS) == "jest (dev)"


def test_choose_by_exact_label(console):
    with answers("react (peer)"):
        assert choose(console, "Dependencies", OPTIONS) == "react (peer)"


def test_choose_by_unique_filter(console):
    with answers("esl"):
        assert choose(console, "Dependencies", OPTIONS) == "eslint (dev)"


def test_filter_then_number_refers_to_filtered_list(console):
    with answers("dev", "2"):
        assert choose(console, "Dependencies", OPTIONS) == "eslint (dev)"


def test_no_match_resets_list(console):
    with answers("vue", "1"):
        assert choose(console, "Dependencies", OPTIONS) == "express"
    assert "No match for 'vue'" in console.export_text()


def test_empty_answer_cancels(console):
    with answers(""):
        assert choose(console, "Dependencies", OPTIONS) is None


def test_choose_with_label_function(console):
    items = [("Install", 1), ("List", 2)]
    with answers("list"):
        assert choose(console, "npm", items, label=lambda item: item[0]) == ("List", 2)


def test_choose_empty_options(console):
    assert choose(console, "Scripts", []) is None


def test_get_console_in_ci(monkeypatch):
    monkeypatch.setenv("CI", "true")
    assert get_console().no_color is True
