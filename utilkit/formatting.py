"""Human-readable formatting of numbers, durations, masked data and text blocks."""

from __future__ import annotations

import math
import re
import sys
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import Iterable, Mapping, Sequence

from utilkit.convert import bytes_to_human_readable, prettify_json

_ANSI_COLOR_RE = re.compile(r"\x1b\[[0-9;]*m")

_COLOR_CODES = {
    "black": "30",
    "red": "31",
    "green": "32",
    "yellow": "33",
    "blue": "34",
    "magenta": "35",
    "cyan": "36",
    "white": "37",
}
_DEFAULT_COLOR_CODE = "37"


def _fixed(number: float, places: int) -> str:
    if math.isnan(number):
        return "NaN"
    return f"{number:.{places}f}"


def _display_float(value: float) -> str:
    """Shortest round-trip decimal form, never in exponent notation."""
    value = float(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    text = format(Decimal(repr(value)), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def _byte_len(text: str) -> int:
    return len(text.encode("utf-8"))


def _byte_slice(raw: bytes, start: int, end: int) -> str:
    if not 0 <= start <= end <= len(raw):
        raise ValueError(f"byte range {start}..{end} out of bounds")
    try:
        return raw[start:end].decode("utf-8")
    except UnicodeDecodeError as exc:
        raise ValueError("byte range does not fall on character boundaries") from exc


def _lines(text: str) -> list[str]:
    if not text:
        return []
    pieces = text.split("\n")
    if pieces[-1] == "":
        pieces.pop()
    return [piece[:-1] if piece.endswith("\r") else piece for piece in pieces]


def _check_non_negative(value: int, name: str) -> None:
    if value < 0:
        raise ValueError(f"{name} must not be negative")


def _group_thousands(integer_part: str) -> str:
    groups: list[str] = []
    end = len(integer_part)
    while end > 0:
        start = max(0, end - 3)
        groups.append(integer_part[start:end])
        end = start
    return ",".join(reversed(groups))


def format_currency(amount: float, currency_symbol: str, decimal_places: int) -> str:
    """Prefix a comma-grouped amount with a currency symbol."""
    return f"{currency_symbol}{format_number_with_commas(amount, decimal_places)}"


def format_number_with_commas(number: float, decimal_places: int) -> str:
    """Format a number with fixed decimals and thousands separators."""
    formatted = _fixed(number, decimal_places)
    integer_part, _, decimal_part = formatted.partition(".")
    grouped = _group_thousands(integer_part)
    return f"{grouped}.{decimal_part}" if decimal_part else grouped


def format_percentage(ratio: float, decimal_places: int) -> str:
    """Render a ratio such as 0.25 as '25.00%'."""
    return f"{_fixed(ratio * 100.0, decimal_places)}%"


def format_file_size(size: int) -> str:
    """Render a byte count using binary units, e.g. '1.00 KB'."""
    return bytes_to_human_readable(size)


def _split_duration(seconds: int) -> tuple[int, int, int, int]:
    _check_non_negative(seconds, "seconds")
    return seconds // 86400, (seconds % 86400) // 3600, (seconds % 3600) // 60, seconds % 60


def format_duration(seconds: int) -> str:
    """Render a duration in Chinese units, e.g. '1小时1分钟1秒'."""
    days, hours, minutes, secs = _split_duration(seconds)
    parts = [
        f"{amount}{unit}"
        for amount, unit in ((days, "天"), (hours, "小时"), (minutes, "分钟"))
        if amount > 0
    ]
    if secs > 0 or not parts:
        parts.append(f"{secs}秒")
    return "".join(parts)


def format_duration_en(seconds: int) -> str:
    """Render a duration in English, e.g. '1 hour, 1 minute, 1 second'."""
    days, hours, minutes, secs = _split_duration(seconds)

    def unit(amount: int, word: str) -> str:
        return f"{amount} {word}{'s' if amount > 1 else ''}"

    parts = [
        unit(amount, word)
        for amount, word in ((days, "day"), (hours, "hour"), (minutes, "minute"))
        if amount > 0
    ]
    if secs > 0 or not parts:
        parts.append(unit(secs, "second"))
    return ", ".join(parts)


def _whole_seconds(delta: timedelta) -> int:
    micros = (delta.days * 86400 + delta.seconds) * 1_000_000 + delta.microseconds
    return int(micros / 1_000_000) if abs(micros) < 2**52 else _trunc_div(micros, 1_000_000)


def _trunc_div(a: int, b: int) -> int:
    quotient = abs(a) // abs(b)
    return quotient if (a >= 0) == (b >= 0) else -quotient


def format_relative_time(moment: datetime, now: datetime | None = None) -> str:
    """Describe how long ago a moment was, in Chinese."""
    if now is None:
        now = datetime.now(timezone.utc)
    seconds = _whole_seconds(now - moment)
    minutes = _trunc_div(seconds, 60)
    hours = _trunc_div(seconds, 3600)
    days = _trunc_div(seconds, 86400)
    if seconds < 60:
        return "刚刚"
    if minutes < 60:
        return f"{minutes}分钟前"
    if hours < 24:
        return f"{hours}小时前"
    if days < 30:
        return f"{days}天前"
    if days < 365:
        return f"{days // 30}个月前"
    return f"{days // 365}年前"


def _ascii_digits(text: str) -> str:
    return "".join(ch for ch in text if "0" <= ch <= "9")


def format_phone_cn(phone: str) -> str:
    """Format an 11-digit mobile number as 'XXX-XXXX-XXXX'; leave others as is."""
    digits = _ascii_digits(phone)
    if len(digits) == 11 and digits.startswith("1"):
        return f"{digits[:3]}-{digits[3:7]}-{digits[7:]}"
    return phone


def format_id_card_masked(id_card: str) -> str:
    """Hide the middle of an 18- or 15-character ID number."""
    raw = id_card.encode("utf-8")
    if len(raw) == 18:
        return f"{_byte_slice(raw, 0, 6)}******{_byte_slice(raw, 14, 18)}"
    if len(raw) == 15:
        return f"{_byte_slice(raw, 0, 6)}******{_byte_slice(raw, 12, 15)}"
    return id_card


def format_bank_card_masked(card_number: str) -> str:
    """Show the first and last four digits of a card number, masking the rest."""
    digits = _ascii_digits(card_number)
    if len(digits) < 8:
        return card_number
    return f"{digits[:4]} {'*' * (len(digits) - 8)} {digits[-4:]}"


def format_email_masked(email: str) -> str:
    """Hide the middle of the local part of an e-mail address."""
    at_pos = email.find("@")
    if at_pos < 0:
        return email
    username = email[:at_pos].encode("utf-8")
    domain = email[at_pos:]
    if len(username) <= 2:
        return f"{_byte_slice(username, 0, 1)}****{domain}"
    visible = max(len(username) // 3, 1)
    start = _byte_slice(username, 0, visible)
    end = _byte_slice(username, len(username) - visible, len(username))
    return f"{start}****{end}{domain}"


def format_table(headers: Sequence[str], rows: Sequence[Sequence[str]]) -> str:
    """Render headers and rows as a pipe-delimited text table."""
    if not headers or not rows:
        return ""
    widths = [_byte_len(header) for header in headers]
    for row in rows:
        for index, cell in enumerate(row[: len(widths)]):
            widths[index] = max(widths[index], _byte_len(cell))

    def render(cells: Iterable[str]) -> str:
        rendered = "".join(
            f" {cell.ljust(widths[i] if i < len(widths) else 0)} |"
            for i, cell in enumerate(cells)
        )
        return f"|{rendered}\n"

    separator = "|" + "".join(f" {'-' * width} |" for width in widths) + "\n"
    return render(headers) + separator + "".join(render(row) for row in rows)


def format_json_pretty(json_str: str) -> str:
    """Re-indent a JSON document."""
    return prettify_json(json_str)


def format_key_value_list(data: Mapping[str, str]) -> str:
    """Render 'key: value' lines with keys padded to a common width."""
    width = max((_byte_len(key) for key in data), default=0)
    return "".join(f"{key.ljust(width)}: {value}\n" for key, value in data.items())


def format_progress_bar(
    current: int,
    total: int,
    width: int,
    filled_char: str = "█",
    empty_char: str = "░",
) -> str:
    """Render a text progress bar such as '[████░░░░] 50/100 50.0%'."""
    for value, name in ((current, "current"), (total, "total"), (width, "width")):
        _check_non_negative(value, name)
    fraction = 0.0 if total == 0 else current / total
    filled_width = min(int(width * fraction), sys.maxsize)
    if filled_width > width:
        raise ValueError("current exceeds total")
    bar = filled_char * filled_width + empty_char * (width - filled_width)
    return f"[{bar}] {current}/{total} {fraction * 100.0:.1f}%"


def format_indented_list(items: Iterable[str], indent: int, bullet: str) -> str:
    """Render items one per line, indented and bulleted."""
    prefix = " " * indent
    return "\n".join(f"{prefix}{bullet} {item}" for item in items)


def format_code_block(code: str, language: str) -> str:
    """Wrap code in a fenced Markdown block."""
    return f"```{language}\n{code}\n```"


def format_quote_block(text: str) -> str:
    """Prefix each line with a Markdown quote marker."""
    return "\n".join(f"> {line}" for line in _lines(text))


def format_heading(text: str, level: int) -> str:
    """Render a Markdown heading, capping the level at 6."""
    return f"{'#' * min(level, 6)} {text}"


def format_separator(fill: str, length: int) -> str:
    """Repeat a character to form a separator line."""
    return fill * length


def format_boxed_text(text: str, padding: int) -> str:
    """Draw a box-drawing frame around the lines of text."""
    lines = _lines(text)
    max_width = max((_byte_len(line) for line in lines), default=0)
    inner = max_width + 2 * padding
    pad = " " * padding
    body = "".join(f"│{pad}{line.ljust(max_width)}{pad}│\n" for line in lines)
    return f"┌{'─' * inner}┐\n{body}└{'─' * inner}┘"


def format_number_range(low: float, high: float, unit: str) -> str:
    """Render 'low - high unit', or 'value unit' when both ends are equal."""
    if abs(low - high) < sys.float_info.epsilon:
        return f"{_display_float(low)} {unit}"
    return f"{_display_float(low)} - {_display_float(high)} {unit}"


def format_colored_text(text: str, color: str) -> str:
    """Wrap text in an ANSI colour escape; unknown colours fall back to white."""
    code = _COLOR_CODES.get(color.lower(), _DEFAULT_COLOR_CODE)
    return f"\x1b[{code}m{text}\x1b[0m"


def strip_ansi_colors(text: str) -> str:
    """Remove ANSI colour escape sequences."""
    return _ANSI_COLOR_RE.sub("", text)