import pytest

from utilkit.convert import (
    ParsedUrl,
    array_to_csv_row,
    array_to_delimited_string,
    build_url,
    bytes_to_hex,
    bytes_to_human_readable,
    celsius_to_fahrenheit,
    celsius_to_kelvin,
    csv_row_to_array,
    delimited_string_to_array,
    fahrenheit_to_celsius,
    feet_to_meters,
    hex_to_bytes,
    hex_to_rgb,
    human_readable_to_bytes,
    json_str_to_value,
    kelvin_to_celsius,
    kg_to_pounds,
    meters_to_feet,
    minify_json,
    number_to_string_formatted,
    parse_url,
    pounds_to_kg,
    prettify_json,
    rgb_to_hex,
    str_to_bool,
    str_to_f32,
    str_to_f64,
    str_to_i32,
    str_to_i64,
    url_decode,
    url_encode,
    value_to_json_str,
)


def test_string_conversions():
    assert str_to_i32("123") == 123
    assert str_to_bool("true") is True
    assert str_to_bool("false") is False
    assert str_to_bool("invalid") is None


def test_integer_parsing_limits():
    assert str_to_i32(" -42 ") == -42
    assert str_to_i32("2147483648") is None
    assert str_to_i64("2147483648") == 2147483648
    assert str_to_i32("1_000") is None
    assert str_to_i32("12a") is None


def test_float_parsing():
    assert str_to_f64(" 3.5 ") == 3.5
    assert str_to_f64("abc") is None
    assert str_to_f32("0.5") == 0.5
    single = str_to_f32("0.1")
    assert abs(single - 0.1) < 1e-7 and single != 0.1


@pytest.mark.parametrize(
    "text, expected",
    [(" YES ", True), ("on", True), ("是", True), ("1", True), ("off", False), ("假", False), ("", None)],
)
def test_str_to_bool_words(text, expected):
    assert str_to_bool(text) is expected


def test_number_to_string_formatted():
    assert number_to_string_formatted(3.14159, 2) == "3.14"
    assert number_to_string_formatted(2.0, 0) == "2"


def test_bytes_conversion():
    data = b"hello"
    assert hex_to_bytes(bytes_to_hex(data)) == data
    assert bytes_to_hex(b"\x00\xff") == "00ff"


@pytest.mark.parametrize("bad", ["abc", "zz", "0g"])
def test_hex_to_bytes_rejects_malformed(bad):
    with pytest.raises(ValueError):
        hex_to_bytes(bad)


def test_json_helpers():
    assert minify_json('{ "b": 1, "a": [1, 2] }') == '{"a":[1,2],"b":1}'
    assert prettify_json('{"a":1}') == '{\n  "a": 1\n}'
    assert value_to_json_str({"k": "v"}) == '{"k":"v"}'
    assert json_str_to_value("[1, null]") == [1, None]
    with pytest.raises(ValueError):
        json_str_to_value("{bad")


def test_url_encode_decode():
    assert url_encode("a b/c") == "a%20b%2Fc"
    assert url_encode("A-z_0.~") == "A-z_0.~"
    assert url_decode("a%20b+c") == "a b c"
    assert url_decode("%E4%B8%AD") == "中"
    assert url_decode(url_encode("x=1&y=中")) == "x=1&y=中"
    with pytest.raises(ValueError):
        url_decode("%FF")


def test_parse_url():
    parsed = parse_url("https://Example.com:443/a?b=1#frag")
    assert parsed == ParsedUrl("https", "example.com", None, "/a", "b=1", "frag")
    plain = parse_url("http://example.com:8080")
    assert plain.port == 8080
    assert plain.path == "/"
    assert plain.query is None
    assert plain.fragment is None


def test_parse_url_rejects_relative():
    with pytest.raises(ValueError):
        parse_url("not a url")


def test_build_url():
    url = build_url("https", "example.com", 8080, "api/v1", [("q", "a b"), ("x", "1")])
    assert url == "https://example.com:8080/api/v1?q=a+b&x=1"
    assert build_url("https", "example.com", 443, "/", None) == "https://example.com/"


def test_build_url_errors():
    with pytest.raises(ValueError):
        build_url("http", "", None, "/", None)
    with pytest.raises(ValueError):
        build_url("http", "example.com", 70000, "/", None)


def test_array_delimited_conversion():
    delimited = array_to_delimited_string([1, 2, 3, 4], ",")
    assert delimited == "1,2,3,4"
    assert delimited_string_to_array(delimited, ",") == ["1", "2", "3", "4"]
    assert delimited_string_to_array(" a , ,b ", ",") == ["a", "b"]
    assert delimited_string_to_array("", ",") == []


def test_csv_conversion():
    csv_row = 'name,"description with, comma","quoted ""value""",123'
    fields = csv_row_to_array(csv_row)
    assert fields == ["name", "description with, comma", 'quoted "value"', "123"]


def test_csv_round_trip():
    fields = ["a", "b,c", 'say "hi"', "line\nbreak"]
    row = array_to_csv_row(fields)
    assert row == 'a,"b,c","say ""hi""","line\nbreak"'
    assert csv_row_to_array(row) == fields


def test_human_readable_bytes():
    assert bytes_to_human_readable(1024) == "1.00 KB"
    assert bytes_to_human_readable(1048576) == "1.00 MB"
    assert bytes_to_human_readable(0) == "0 B"
    assert bytes_to_human_readable(500) == "500 B"
    assert human_readable_to_bytes("1 KB") == 1024
    assert human_readable_to_bytes("1 MB") == 1048576


def test_human_readable_to_bytes_edges():
    assert human_readable_to_bytes("2.5 kb") == 2560
    assert human_readable_to_bytes("10") == 10
    assert human_readable_to_bytes("1 XB") is None
    assert human_readable_to_bytes("abc") is None
    assert human_readable_to_bytes("-1 KB") == 0


def test_color_conversion():
    assert hex_to_rgb("#FF0000") == (255, 0, 0)
    assert rgb_to_hex(255, 0, 0) == "#FF0000"
    assert hex_to_rgb("00ff7f") == (0, 255, 127)
    assert hex_to_rgb("FFF") is None
    assert hex_to_rgb("#GG0000") is None
    with pytest.raises(ValueError):
        rgb_to_hex(256, 0, 0)


def test_temperature_conversion():
    assert celsius_to_fahrenheit(0.0) == 32.0
    assert fahrenheit_to_celsius(32.0) == 0.0
    assert celsius_to_kelvin(0.0) == 273.15
    assert kelvin_to_celsius(273.15) == 0.0


def test_length_and_weight_round_trips():
    assert meters_to_feet(1.0) == pytest.approx(3.28084)
    assert feet_to_meters(meters_to_feet(10.0)) == pytest.approx(10.0)
    assert kg_to_pounds(1.0) == pytest.approx(2.20462)
    assert pounds_to_kg(kg_to_pounds(5.0)) == pytest.approx(5.0)