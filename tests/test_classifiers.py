from __future__ import annotations

import pytest

from corslab.evaluator import (
    compute_needs_preflight,
    is_origin_allowed,
    is_simple_content_type,
    is_simple_header_name,
)


@pytest.mark.parametrize("name", ["accept", "Accept-Language", "CONTENT-LANGUAGE", "content-type"])
def test_safelisted_header_names_are_simple(name):
    assert is_simple_header_name(name) is True


@pytest.mark.parametrize("name", ["authorization", "x-request-id", "range", ""])
def test_other_header_names_are_not_simple(name):
    assert is_simple_header_name(name) is False


@pytest.mark.parametrize(
    "value",
    ["application/x-www-form-urlencoded", " Multipart/Form-Data ", "TEXT/PLAIN", "", None],
)
def test_form_content_types_are_simple(value):
    assert is_simple_content_type(value) is True


@pytest.mark.parametrize("value", ["application/json", "text/plain; charset=utf-8", "text/html"])
def test_other_content_types_are_not_simple(value):
    assert is_simple_content_type(value) is False


def test_origin_allowed_by_exact_match():
    assert is_origin_allowed("https://a.com", ("https://a.com", "https://b.com")) is True


def test_origin_match_is_case_sensitive():
    assert is_origin_allowed("https://A.com", ("https://a.com",)) is False


def test_wildcard_allows_any_origin():
    assert is_origin_allowed("https://anything.example", ("*",)) is True


def test_missing_origin_is_never_allowed():
    assert is_origin_allowed("", ("*",)) is False
    assert is_origin_allowed(None, ("*",)) is False


def test_empty_allow_list_denies_everything():
    assert is_origin_allowed("https://a.com", ()) is False


def test_simple_get_needs_no_preflight():
    assert compute_needs_preflight("GET", ("accept", "content-type"), "") is False


def test_missing_method_defaults_to_get():
    assert compute_needs_preflight(None, (), "application/json") is False


@pytest.mark.parametrize("method", ["PUT", "delete", "PATCH", "OPTIONS"])
def test_non_simple_method_needs_preflight(method):
    assert compute_needs_preflight(method, (), "") is True


def test_custom_header_needs_preflight():
    assert compute_needs_preflight("GET", ("x-request-id",), "") is True


def test_post_with_json_needs_preflight():
    assert compute_needs_preflight("POST", (), "application/json") is True


def test_post_with_form_content_type_is_simple():
    assert compute_needs_preflight("post", ("content-type",), "text/plain") is False


def test_content_type_ignored_for_get_and_head():
    assert compute_needs_preflight("GET", (), "application/json") is False
    assert compute_needs_preflight("HEAD", (), "application/json") is False
