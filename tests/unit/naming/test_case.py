"""命名規則変換のユニットテスト。"""

import pytest

from tagliatelle.models.errors import UnsupportedCaseError
from tagliatelle.naming.case import (
    Convention,
    get_converter,
    is_supported,
    split_words,
    to_camel,
    to_go_camel,
    to_go_kebab,
    to_go_pascal,
    to_go_snake,
    to_kebab,
    to_pascal,
    to_snake,
)


class TestSplitWords:
    def test_split_separators(self) -> None:
        assert split_words("user_id-value.name here") == ["user", "id", "value", "name", "here"]

    def test_split_case_transitions(self) -> None:
        assert split_words("userID") == ["user", "ID"]
        assert split_words("HTTPServer") == ["HTTP", "Server"]
        assert split_words("createdAt") == ["created", "At"]

    def test_digits_stay_with_previous_word(self) -> None:
        assert split_words("http2Server") == ["http2", "Server"]
        assert split_words("utf8") == ["utf8"]

    def test_empty(self) -> None:
        assert split_words("") == []
        assert split_words("__") == []


class TestConverters:
    def test_camel(self) -> None:
        assert to_camel("user_id") == "userId"
        assert to_camel("UserID") == "userId"
        assert to_camel("Thing") == "thing"

    def test_pascal(self) -> None:
        assert to_pascal("user_id") == "UserId"
        assert to_pascal("http-server") == "HttpServer"

    def test_kebab(self) -> None:
        assert to_kebab("UserID") == "user-id"
        assert to_kebab("created_at") == "created-at"

    def test_snake(self) -> None:
        assert to_snake("UserID") == "user_id"
        assert to_snake("user_id") == "user_id"
        assert to_snake("HTTPServer") == "http_server"

    def test_go_camel(self) -> None:
        assert to_go_camel("user_id") == "userID"
        assert to_go_camel("http_server") == "httpServer"
        assert to_go_camel("ID") == "id"

    def test_go_pascal(self) -> None:
        assert to_go_pascal("http_server") == "HTTPServer"
        assert to_go_pascal("userId") == "UserID"
        assert to_go_pascal("json_url") == "JSONURL"

    def test_go_adjacent_initialisms(self) -> None:
        assert to_go_pascal("JSONURL") == "JSONURL"
        assert to_go_pascal("UserIDURL") == "UserIDURL"
        assert to_go_pascal("APIV2") == "APIV2"
        assert to_go_camel("userIDURL") == "userIDURL"
        assert to_go_camel("JSONURL") == "jsonURL"
        assert to_go_snake("JSONURL") == "JSON_URL"
        assert to_go_kebab("UserIDURL") == "user-ID-URL"

    def test_go_caps_run_without_initialism_prefix_kept_whole(self) -> None:
        assert to_go_pascal("IDENTITY") == "Identity"
        assert to_go_pascal("USERNAME") == "Username"

    def test_go_kebab(self) -> None:
        assert to_go_kebab("UserID") == "user-ID"
        assert to_go_kebab("http_server") == "HTTP-server"

    def test_go_snake(self) -> None:
        assert to_go_snake("UserID") == "user_ID"
        assert to_go_snake("api_key") == "API_key"

    def test_empty_input(self) -> None:
        for convention in Convention:
            assert get_converter(convention.value)("") == ""


class TestGetConverter:
    @pytest.mark.parametrize("convention", [c.value for c in Convention])
    def test_all_conventions_supported(self, convention: str) -> None:
        assert is_supported(convention)
        assert callable(get_converter(convention))

    def test_upper_lower(self) -> None:
        assert get_converter("upper")("userId") == "USERID"
        assert get_converter("lower")("UserID") == "userid"

    def test_unknown_convention(self) -> None:
        with pytest.raises(UnsupportedCaseError, match="unsupported case: bogus") as exc_info:
            get_converter("bogus")
        assert exc_info.value.convention == "bogus"
        assert not is_supported("bogus")

    def test_identifiers_are_case_sensitive(self) -> None:
        with pytest.raises(UnsupportedCaseError):
            get_converter("gocamel")

    @pytest.mark.parametrize("convention", [c.value for c in Convention])
    @pytest.mark.parametrize(
        "value",
        ["user_id", "UserID", "HTTPServer", "createdAt", "first-name", "api_version2", "json_url", "user_id_url", "api_v2"],
    )
    def test_converter_is_idempotent(self, convention: str, value: str) -> None:
        converter = get_converter(convention)
        once = converter(value)
        assert converter(once) == once

    def test_single_letter_words_are_ambiguous_for_camel(self) -> None:
        # 1文字の単語の連続と頭字語は区別できない
        assert to_camel("user_i_d") == "userID"
        assert to_camel("userID") == "userId"
