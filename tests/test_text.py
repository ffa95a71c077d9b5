import pytest

from utilkit import text


def test_is_blank():
    assert text.is_blank("")
    assert text.is_blank("   ")
    assert text.is_blank("\t\n")
    assert not text.is_blank("hello")
    assert text.is_not_blank(" a ")


def test_camel_snake_conversion():
    assert text.camel_to_snake("camelCase") == "camel_case"
    assert text.snake_to_camel("snake_case") == "snakeCase"
    assert text.camel_to_snake("getHTTPResponse") == "get_httpresponse"
    assert text.camel_to_snake("HTTPServer") == "httpserver"


def test_truncate():
    assert text.truncate("Hello World", 5) == "Hello"
    assert text.truncate_with_ellipsis("Hello World", 8) == "Hello..."
    assert text.truncate_with_ellipsis("Hello", 10) == "Hello"
    assert text.truncate_with_ellipsis("Hello", 2) == "..."


def test_truncate_counts_utf8_bytes_and_keeps_graphemes():
    assert text.truncate("héllo", 2) == "h"
    assert text.truncate("e\u0301x", 2) == ""
    assert text.truncate("e\u0301x", 3) == "e\u0301"


def test_validation():
    assert text.is_valid_email("test@example.com")
    assert not text.is_valid_email("invalid-email")
    assert not text.is_valid_email("test@example.com\n")


def test_phone_and_id_card_rejections():
    assert not text.is_valid_phone_cn("12345678901")
    assert not text.is_valid_phone_cn("1380000")
    assert not text.is_valid_id_card_cn("12345")
    assert not text.is_valid_id_card_cn("ABCDEFGHIJKLMNOPQR")


def test_similarity():
    assert text.similarity("hello", "hello") == 1.0
    assert text.similarity("hello", "world") < 1.0
    assert text.similarity("", "") == 1.0
    assert text.similarity("kitten", "sitting") == pytest.approx(4 / 7)


def test_levenshtein():
    assert text.levenshtein_distance("kitten", "sitting") == 3
    assert text.levenshtein_distance("", "abc") == 3
    assert text.levenshtein_distance("same", "same") == 0


def test_case_helpers():
    assert text.capitalize("hello") == "Hello"
    assert text.capitalize("") == ""
    assert text.title_case("hello  big\tworld") == "Hello Big World"


def test_reverse_and_count_graphemes():
    assert text.reverse("abc") == "cba"
    assert text.reverse("e\u0301x") == "xe\u0301"
    assert text.char_count("e\u0301") == 1


def test_padding():
    assert text.pad_left("7", 3, "0") == "007"
    assert text.pad_right("ab", 4, "-") == "ab--"
    assert text.pad_center("ab", 5, "*") == "*ab**"
    assert text.pad_left("abcd", 2, "0") == "abcd"


def test_prefix_suffix():
    assert text.remove_prefix("prefix_name", "prefix_") == "name"
    assert text.remove_prefix("name", "x") == "name"
    assert text.remove_suffix("file.txt", ".txt") == "file"


def test_extraction():
    assert text.extract_numbers("a12b345") == ["12", "345"]
    assert text.extract_emails("contact alice@example.com now") == ["alice@example.com"]
    assert text.extract_urls("see https://example.com/a and http://example.com") == [
        "https://example.com/a",
        "http://example.com",
    ]


def test_remove_whitespace_and_word_count():
    assert text.remove_whitespace(" a b\tc\n") == "abc"
    assert text.word_count("  one two   three ") == 3
    assert text.word_count("") == 0


def test_random_strings():
    value = text.random_string(32)
    assert len(value) == 32
    assert value.isascii() and value.isalnum()
    digits = text.random_numeric_string(10)
    assert len(digits) == 10
    assert digits.isdigit()


def test_template_replace():
    result = text.template_replace("Hi {name}, {name}!", {"name": "Ann"})
    assert result == "Hi Ann, Ann!"


def test_html():
    assert text.strip_html("<p>Hi <b>there</b></p>") == "Hi there"
    assert text.escape_html("<a href=\"x\">&'") == "&lt;a href=&quot;x&quot;&gt;&amp;&#x27;"


def test_hash_string_is_stable():
    first = text.hash_string("hello")
    assert first == text.hash_string("hello")
    assert 0 <= first < 2**64
    assert text.hash_string("a") != text.hash_string("b")