"""Conversions between strings, numbers, encodings, URLs and units."""

from __future__ import annotations

import json
import math
import re
import struct
from dataclasses import dataclass
from typing import Any, Iterable, Sequence
from urllib.parse import quote, quote_plus, urlsplit

_INT_RE = re.compile(r"[+-]?[0-9]+")
_HEX_BYTE_RE = re.compile(r"\+?[0-9A-Fa-f]{1,2}")
_SCHEME_RE = re.compile(r"[A-Za-z][A-Za-z0-9+.\-]*")
_FORBIDDEN_HOST_CHARS = set(" \t\r\n#/?@\\<>^|")

_DEFAULT_PORTS = {"http": 80, "https": 443, "ws": 80, "wss": 443, "ftp": 21}
_SPECIAL_SCHEMES = frozenset(_DEFAULT_PORTS) | {"file"}

# Printable ASCII left as is in a URL path: everything except space " # < > ? ` { }
_PATH_SAFE = "!$%&'()*+,-./:;=@[\\]^_|~"

_TRUE_WORDS = frozenset({"true", "1", "yes", "on", "是", "真"})
_FALSE_WORDS = frozenset({"false", "0", "no", "off", "否", "假"})

_SIZE_UNITS = ("B", "KB", "MB", "GB", "TB", "PB")
_SIZE_MULTIPLIERS = {unit: 1024**power for power, unit in enumerate(_SIZE_UNITS)}
_U64_MAX = 2**64 - 1


@dataclass(frozen=True)
class ParsedUrl:
    """The components of an absolute URL."""

    scheme: str
    host: str | None
    port: int | None
    path: str
    query: str | None
    fragment: str | None


def _parse_int(s: str, bits: int) -> int | None:
    text = s.strip()
    if not _INT_RE.fullmatch(text):
        return None
    value = int(text)
    limit = 1 << (bits - 1)
    if not -limit <= value < limit:
        return None
    return value


def _parse_float(s: str) -> float | None:
    text = s.strip()
    if not text.isascii() or "_" in text:
        return None
    try:
        return float(text)
    except ValueError:
        return None


def _to_f32(value: float) -> float:
    try:
        return struct.unpack("<f", struct.pack("<f", value))[0]
    except OverflowError:
        return math.copysign(math.inf, value)


def _parse_hex_byte(text: str) -> int | None:
    if not _HEX_BYTE_RE.fullmatch(text):
        return None
    return int(text, 16)


def _fixed(num: float, places: int) -> str:
    if math.isnan(num):
        return "NaN"
    return f"{num:.{places}f}"


def str_to_i32(s: str) -> int | None:
    """Parse a 32-bit signed integer, or return None."""
    return _parse_int(s, 32)


def str_to_i64(s: str) -> int | None:
    """Parse a 64-bit signed integer, or return None."""
    return _parse_int(s, 64)


def str_to_f32(s: str) -> float | None:
    """Parse a number rounded to single precision, or return None."""
    value = _parse_float(s)
    return None if value is None else _to_f32(value)


def str_to_f64(s: str) -> float | None:
    """Parse a double-precision number, or return None."""
    return _parse_float(s)


def str_to_bool(s: str) -> bool | None:
    """Interpret common true/false words (English and Chinese)."""
    word = s.strip().lower()
    if word in _TRUE_WORDS:
        return True
    if word in _FALSE_WORDS:
        return False
    return None


def number_to_string_formatted(num: float, decimal_places: int) -> str:
    """Format a number with a fixed count of decimal places."""
    return _fixed(num, decimal_places)


def bytes_to_hex(data: bytes) -> str:
    """Encode bytes as lower-case hexadecimal."""
    return bytes(data).hex()


def hex_to_bytes(text: str) -> bytes:
    """Decode a hexadecimal string; raise ValueError if it is malformed."""
    raw = text.encode("utf-8")
    if len(raw) % 2:
        raise ValueError("Invalid hex string length")
    result = bytearray()
    for start in range(0, len(raw), 2):
        chunk = raw[start : start + 2].decode("utf-8")
        byte = _parse_hex_byte(chunk)
        if byte is None:
            raise ValueError(f"invalid hex digits: {chunk!r}")
        result.append(byte)
    return bytes(result)


def _reject_constant(name: str) -> Any:
    raise ValueError(f"invalid JSON number: {name}")


def json_str_to_value(json_str: str) -> Any:
    """Parse a JSON document."""
    return json.loads(json_str, parse_constant=_reject_constant)


def value_to_json_str(value: Any) -> str:
    """Serialise a value as compact JSON with sorted object keys."""
    return json.dumps(
        value,
        ensure_ascii=False,
        separators=(",", ":"),
        sort_keys=True,
        allow_nan=False,
    )


def prettify_json(json_str: str) -> str:
    """Re-indent a JSON document with two spaces."""
    value = json_str_to_value(json_str)
    return json.dumps(value, ensure_ascii=False, indent=2, sort_keys=True, allow_nan=False)


def minify_json(json_str: str) -> str:
    """Strip insignificant whitespace from a JSON document."""
    return value_to_json_str(json_str_to_value(json_str))


def url_encode(s: str) -> str:
    """Percent-encode everything except unreserved characters."""
    return quote(s, safe="")


def url_decode(s: str) -> str:
    """Decode percent escapes and '+' as space; raise ValueError on bad UTF-8."""
    out = bytearray()
    chars = iter(s)
    for ch in chars:
        if ch == "%":
            pair = next(chars, "0") + next(chars, "0")
            byte = _parse_hex_byte(pair)
            if byte is not None:
                out.append(byte)
        elif ch == "+":
            out.append(0x20)
        else:
            out.extend(ch.encode("utf-8"))
    return out.decode("utf-8")


def parse_url(url_str: str) -> ParsedUrl:
    """Split an absolute URL into its parts; raise ValueError if it is not one."""
    text = url_str.strip()
    parts = urlsplit(text)
    if not parts.scheme or not _SCHEME_RE.fullmatch(parts.scheme):
        raise ValueError("relative URL without a base")
    scheme = parts.scheme.lower()
    special = scheme in _SPECIAL_SCHEMES

    host = parts.hostname or None
    if host is not None and ":" in host:
        host = f"[{host}]"
    if special and scheme != "file" and host is None:
        raise ValueError("empty host")

    port = parts.port
    if port is not None and _DEFAULT_PORTS.get(scheme) == port:
        port = None

    path = parts.path
    if special and not path:
        path = "/"

    before_fragment, has_fragment, _ = text.partition("#")
    query = parts.query if "?" in before_fragment else None
    fragment = parts.fragment if has_fragment else None

    return ParsedUrl(
        scheme=scheme,
        host=host,
        port=port,
        path=path,
        query=query,
        fragment=fragment,
    )


def _form_encode(value: str) -> str:
    return quote_plus(value, safe="*").replace("~", "%7E")


def build_url(
    scheme: str,
    host: str,
    port: int | None = None,
    path: str = "",
    query_params: Iterable[tuple[str, str]] | None = None,
) -> str:
    """Assemble a URL from its parts; raise ValueError on invalid parts."""
    scheme = scheme.lower()
    if not _SCHEME_RE.fullmatch(scheme):
        raise ValueError(f"invalid scheme: {scheme!r}")
    special = scheme in _SPECIAL_SCHEMES
    if special:
        host = host.lower()
    if special and scheme != "file" and not host:
        raise ValueError("empty host")
    if any(ch in _FORBIDDEN_HOST_CHARS for ch in host):
        raise ValueError(f"invalid host: {host!r}")

    authority = host
    if port is not None:
        if scheme == "file" or not host:
            raise ValueError("invalid port")
        if not 0 <= port <= 65535:
            raise ValueError(f"invalid port: {port}")
        if _DEFAULT_PORTS.get(scheme) != port:
            authority = f"{host}:{port}"

    encoded_path = quote(path, safe=_PATH_SAFE)
    if (encoded_path or special) and not encoded_path.startswith("/"):
        encoded_path = "/" + encoded_path

    url = f"{scheme}://{authority}{encoded_path}"
    if query_params is not None:
        pairs = "&".join(f"{_form_encode(k)}={_form_encode(v)}" for k, v in query_params)
        url = f"{url}?{pairs}"
    return url


def array_to_delimited_string(items: Iterable[Any], delimiter: str) -> str:
    """Join the string forms of the items with a delimiter."""
    return delimiter.join(str(item) for item in items)


def delimited_string_to_array(s: str, delimiter: str) -> list[str]:
    """Split on a delimiter, trimming pieces and dropping empty ones."""
    if not s:
        return []
    pieces = list(s) if delimiter == "" else s.split(delimiter)
    return [stripped for piece in pieces if (stripped := piece.strip())]


def csv_row_to_array(csv_row: str) -> list[str]:
    """Split one CSV row into fields, honouring double-quoted fields."""
    fields: list[str] = []
    current: list[str] = []
    in_quotes = False
    chars = iter(csv_row)
    pending: str | None = None
    while True:
        if pending is not None:
            ch, pending = pending, None
        else:
            ch = next(chars, None)
            if ch is None:
                break
        if ch == '"':
            if in_quotes:
                following = next(chars, None)
                if following == '"':
                    current.append('"')
                    continue
                in_quotes = False
                pending = following
                if pending is None:
                    break
            else:
                in_quotes = True
        elif ch == "," and not in_quotes:
            fields.append("".join(current))
            current = []
        else:
            current.append(ch)
    fields.append("".join(current))
    return fields


def array_to_csv_row(fields: Sequence[str]) -> str:
    """Join fields into one CSV row, quoting where needed."""

    def quoted(field: str) -> str:
        if "," in field or '"' in field or "\n" in field:
            return '"' + field.replace('"', '""') + '"'
        return field

    return ",".join(quoted(field) for field in fields)


def bytes_to_human_readable(size: int) -> str:
    """Render a byte count using binary units, e.g. '1.00 KB'."""
    if size < 0:
        raise ValueError("size must not be negative")
    if size == 0:
        return "0 B"
    value = float(size)
    unit_index = 0
    while value >= 1024.0 and unit_index < len(_SIZE_UNITS) - 1:
        value /= 1024.0
        unit_index += 1
    if unit_index == 0:
        return f"{size} {_SIZE_UNITS[0]}"
    return f"{value:.2f} {_SIZE_UNITS[unit_index]}"


def human_readable_to_bytes(size_str: str) -> int | None:
    """Parse a size such as '1.5 MB' into bytes, or return None."""
    text = size_str.strip().upper()
    split_at = next((i for i, ch in enumerate(text) if ch.isalpha()), None)
    if split_at is None:
        number_part, unit_part = text, "B"
    else:
        number_part, unit_part = text[:split_at], text[split_at:]

    number = _parse_float(number_part)
    if number is None:
        return None
    multiplier = _SIZE_MULTIPLIERS.get(unit_part.strip())
    if multiplier is None:
        return None

    total = number * float(multiplier)
    if math.isnan(total):
        return 0
    if total == math.inf:
        return _U64_MAX
    return max(0, min(_U64_MAX, int(total)))


def hex_to_rgb(hex_color: str) -> tuple[int, int, int] | None:
    """Convert '#RRGGBB' to an (r, g, b) tuple, or return None."""
    digits = hex_color.lstrip("#")
    if not digits.isascii() or len(digits) != 6:
        return None
    channels = tuple(_parse_hex_byte(digits[i : i + 2]) for i in (0, 2, 4))
    if any(channel is None for channel in channels):
        return None
    return channels  # type: ignore[return-value]


def rgb_to_hex(r: int, g: int, b: int) -> str:
    """Convert channel values 0-255 to '#RRGGBB'."""
    for channel in (r, g, b):
        if not 0 <= channel <= 255:
            raise ValueError(f"colour channel out of range: {channel}")
    return f"#{r:02X}{g:02X}{b:02X}"


def celsius_to_fahrenheit(celsius: float) -> float:
    return celsius * 9.0 / 5.0 + 32.0


def fahrenheit_to_celsius(fahrenheit: float) -> float:
    return (fahrenheit - 32.0) * 5.0 / 9.0


def celsius_to_kelvin(celsius: float) -> float:
    return celsius + 273.15


def kelvin_to_celsius(kelvin: float) -> float:
    return kelvin - 273.15


def meters_to_feet(meters: float) -> float:
    return meters * 3.28084


def feet_to_meters(feet: float) -> float:
    return feet / 3.28084


def kg_to_pounds(kg: float) -> float:
    return kg * 2.20462


def pounds_to_kg(pounds: float) -> float:
    return pounds / 2.20462