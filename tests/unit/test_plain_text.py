"""
Unit tests for plain-text rendering of name listings.
"""

from sandpit.api.plain_text import names_sentence, render_name_list


def test_render_name_list_joins_with_comma_and_space() -> None:
    assert render_name_list(["tom", "dick", "harry"]) == "[tom, dick, harry]"


def test_render_empty_list() -> None:
    assert render_name_list([]) == "[]"


def test_names_sentence_prefix() -> None:
    assert names_sentence(["johnsmith"]) == "Names are [johnsmith]"
