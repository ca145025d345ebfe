from __future__ import annotations

import pytest

from tripplanner.errors import ValidationError
from tripplanner.users.interests import INTEREST_TAGS, validate_interests
from tripplanner.validation import Invalid, Ok, unwrap_or_raise, validate_place_id


def test_taxonomy_is_unified():
    assert "Sports" in INTEREST_TAGS
    assert "Sport" not in INTEREST_TAGS
    assert len(set(INTEREST_TAGS)) == len(INTEREST_TAGS)


def test_valid_interests_are_cleaned():
    result = validate_interests(["Beach", " Culture ", "Beach", "Sport"])
    assert result == Ok(["Beach", "Culture", "Sports"])


def test_empty_interest_list_is_valid():
    assert validate_interests([]) == Ok([])


def test_unknown_interests_are_listed():
    result = validate_interests(["Beach", "Skiing", "Gaming"])
    assert result == Invalid("Invalid interests: Skiing, Gaming")


def test_tag_names_are_case_sensitive():
    assert isinstance(validate_interests(["beach"]), Invalid)


def test_unwrap_ok():
    assert unwrap_or_raise(Ok(["Beach"])) == ["Beach"]


def test_unwrap_invalid_raises_400():
    with pytest.raises(ValidationError) as exc_info:
        unwrap_or_raise(Invalid("nope"))
    assert exc_info.value.status_code == 400
    assert exc_info.value.message == "nope"


def test_place_id_is_trimmed():
    assert validate_place_id(" p01 ") == Ok("p01")


@pytest.mark.parametrize("raw", [None, "", "   "])
def test_blank_place_id_is_invalid(raw):
    assert validate_place_id(raw) == Invalid("placeId is required")
