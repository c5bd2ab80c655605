import pytest
from towerclient._utils import load_json, to_snake_case
from towerclient.exceptions import ParseError


@pytest.mark.parametrize(
    "key,expected",
    [
        ("extraVars", "extra_vars"),
        ("ansibleHost", "ansible_host"),
        ("zipCode", "zip_code"),
        ("toS", "to_s"),
        ("Word", "word"),
        ("id", "id"),
        ("already_snake", "already_snake"),
        ("config2Profile", "config2_profile"),
        ("isConnected", "is_connected"),
        ("", ""),
    ],
)
def test_to_snake_case(key, expected):
    assert to_snake_case(key) == expected


def test_load_json():
    assert load_json('{"a": [1, 2]}') == {"a": [1, 2]}
    assert load_json(b"[1]") == [1]


@pytest.mark.parametrize("text", ["{not json", "", None])
def test_load_json_invalid(text):
    with pytest.raises(ParseError):
        load_json(text)
