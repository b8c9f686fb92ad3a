"""Tests for URI template expansion."""

from __future__ import annotations

import pytest

from halkit.errors import ErrorCode, MalformedLinkError, TemplateError
from halkit.hal import expand, is_fully_expanded, parse_template_link


class TestQueryExpansion:
    """Tests for the {?a,b} form."""

    def test_all_values(self) -> None:
        link = {"href": "/api/posts{?page,size}", "templated": True}
        assert parse_template_link(link, {"page": 2, "size": 10}) == "/api/posts?page=2&size=10"

    def test_partial_values(self) -> None:
        link = {"href": "/api/posts{?page,size}", "templated": True}
        assert parse_template_link(link, {"page": 1}) == "/api/posts?page=1"

    def test_no_values_removes_template(self) -> None:
        link = {"href": "/api/posts{?page,size}", "templated": True}
        assert parse_template_link(link, {}) == "/api/posts"

    def test_none_and_empty_string_skipped(self) -> None:
        assert expand("/api/posts{?page,size,q}", {"page": None, "size": "", "q": "hal"}) == "/api/posts?q=hal"

    def test_zero_and_false_are_kept(self) -> None:
        assert expand("/s{?page,draft}", {"page": 0, "draft": False}) == "/s?page=0&draft=false"

    def test_existing_query_uses_ampersand(self) -> None:
        assert expand("/api/posts?sort=desc{?page}", {"page": 3}) == "/api/posts?sort=desc&page=3"

    def test_names_are_trimmed(self) -> None:
        assert expand("/api/posts{?page, size}", {"size": 5}) == "/api/posts?size=5"

    def test_values_are_encoded(self) -> None:
        assert expand("/search{?q}", {"q": "a b&c"}) == "/search?q=a%20b%26c"

    def test_booleans(self) -> None:
        assert expand("/x{?flag}", {"flag": True}) == "/x?flag=true"


class TestPathExpansion:
    """Tests for the {name} form."""

    def test_simple(self) -> None:
        link = {"href": "/api/posts/{id}", "templated": True}
        assert parse_template_link(link, {"id": 42}) == "/api/posts/42"

    def test_slash_is_encoded(self) -> None:
        link = {"href": "/api/posts/{id}", "templated": True}
        assert parse_template_link(link, {"id": "a/b"}) == "/api/posts/a%2Fb"

    def test_space_is_encoded(self) -> None:
        assert expand("/tags/{tag}", {"tag": "hal json"}) == "/tags/hal%20json"

    def test_unreserved_marks_kept(self) -> None:
        assert expand("/t/{v}", {"v": "a-b_c.d!e~f*g'h(i)"}) == "/t/a-b_c.d!e~f*g'h(i)"

    def test_repeated_placeholder(self) -> None:
        link = {"href": "/api/{id}/copy/{id}", "templated": True}
        assert parse_template_link(link, {"id": "x"}) == "/api/x/copy/x"

    def test_missing_variable_left_in_place(self) -> None:
        result = expand("/api/posts/{id}/comments/{commentId}", {"id": 1})
        assert result == "/api/posts/1/comments/{commentId}"
        assert is_fully_expanded(result) is False

    def test_boolean_value(self) -> None:
        assert expand("/flags/{on}", {"on": False}) == "/flags/false"

    def test_path_and_query_together(self) -> None:
        href = "/api/users/{user}/posts{?page,size}"
        assert expand(href, {"user": "bob", "page": 2}) == "/api/users/bob/posts?page=2"


class TestNonTemplated:
    """Links without templated=True are returned verbatim."""

    def test_variables_ignored(self) -> None:
        assert parse_template_link({"href": "/api/posts/1"}, {"page": 99}) == "/api/posts/1"

    def test_template_syntax_ignored_when_not_templated(self) -> None:
        link = {"href": "/api/posts{?page}", "templated": False}
        assert parse_template_link(link, {"page": 1}) == "/api/posts{?page}"

    def test_unsupported_syntax_ignored_when_not_templated(self) -> None:
        assert parse_template_link({"href": "/x{?list*}"}, {}) == "/x{?list*}"


class TestUnsupportedSyntax:
    """Operators and modifiers outside the supported subset are rejected."""

    @pytest.mark.parametrize(
        "href",
        ["/x{?list*}", "/x{id*}", "/x{var:3}", "/x{+path}", "/x{#frag}", "/x{.ext}", "/x{/seg}", "/x{;p}", "/x{&q}"],
    )
    def test_rejected(self, href: str) -> None:
        with pytest.raises(TemplateError) as exc_info:
            expand(href, {"list": [1, 2], "id": 1, "var": "value"})
        assert exc_info.value.template == href

    def test_rejected_through_link(self) -> None:
        with pytest.raises(TemplateError):
            parse_template_link({"href": "/api/posts{?tags*}", "templated": True}, {})


class TestMissingHref:
    @pytest.mark.parametrize(
        "link",
        [{"method": "POST"}, {"href": None, "templated": True}, {"href": 7}],
    )
    def test_raises_malformed_link(self, link: dict) -> None:
        with pytest.raises(MalformedLinkError) as exc_info:
            parse_template_link(link, {})
        assert exc_info.value.error_code is ErrorCode.MALFORMED_LINK
