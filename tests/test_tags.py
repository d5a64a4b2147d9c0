"""Tests for tag parsing and name derivation."""

from dataclasses import field, fields, dataclass
from typing import Annotated, get_args

import pytest

from envload.tags import (
    Embed,
    Env,
    camel_case_to_snake,
    camel_case_to_upper_snake,
    field_tag,
    get_name,
    is_embedded,
    parse_tag,
)


@pytest.mark.parametrize(
    "name, expected",
    [
        ("test", "test"),
        ("MyName", "My_Name"),
        ("My2Name", "My2_Name"),
        ("MyID", "My_ID"),
        ("My_Name", "My_Name"),
        ("MyFullName", "My_Full_Name"),
        ("URLName", "URLName"),
        ("MyURLName", "My_URLName"),
    ],
)
def test_camel_case_to_snake(name, expected):
    assert camel_case_to_snake(name) == expected


def test_camel_case_to_upper_snake():
    assert camel_case_to_upper_snake("MyURLName") == "MY_URLNAME"
    assert camel_case_to_upper_snake("db_host") == "DB_HOST"
    assert camel_case_to_upper_snake("maxRetries") == "MAX_RETRIES"


@pytest.mark.parametrize(
    "tag, field_name, name, optional, secret",
    [
        ("", "Name", "NAME", False, False),
        ("", "MyName", "MY_NAME", False, False),
        ("NaME", "Name", "NaME", False, False),
        ("NaME,secret", "Name", "NaME", False, True),
        (",secret", "Name", "NAME", False, True),
        ("NaME,", "Name", "NaME", False, False),
        ("NaME,optional", "Name", "NaME", True, False),
        ("NaME,optional,secret", "Name", "NaME", True, True),
        ("NaME,secret,optional", "Name", "NaME", True, True),
        (",optional,secret,", "api_key", "API_KEY", True, True),
        ("-", "Name", "-", False, False),
    ],
)
def test_get_name(tag, field_name, name, optional, secret):
    resolved, options = get_name(tag, field_name)
    assert resolved == name
    assert options.optional == optional
    assert options.secret == secret


def test_parse_tag_keeps_unknown_options():
    name, options = parse_tag("NaME,required")
    assert name == "NaME,required"
    assert not options.optional and not options.secret

    name, options = parse_tag("NaME,required,secret")
    assert name == "NaME,required"
    assert options.secret


def test_parse_tag_recognizes_each_option_once():
    name, options = parse_tag("NaME,secret,secret")
    assert name == "NaME,secret"
    assert options.secret


@dataclass
class Tagged:
    a: Annotated[int, Env("A_NAME,optional")] = 0
    b: int = field(default=0, metadata={"env": "B_NAME", "conf": "OTHER"})
    c: Annotated[int, Embed()] = 0
    d: int = field(default=0, metadata={"embed": True})
    e: int = 0


def _field_info(name):
    f = next(f for f in fields(Tagged) if f.name == name)
    hint = Tagged.__annotations__[name]
    return f.metadata, list(get_args(hint)[1:])


def test_field_tag_sources():
    assert field_tag(*_field_info("a"), "env") == "A_NAME,optional"
    assert field_tag(*_field_info("b"), "env") == "B_NAME"
    assert field_tag(*_field_info("b"), "conf") == "OTHER"
    assert field_tag(*_field_info("e"), "env") == ""


def test_is_embedded():
    assert is_embedded(*_field_info("c"))
    assert is_embedded(*_field_info("d"))
    assert not is_embedded(*_field_info("e"))
    assert is_embedded({}, [Embed])
