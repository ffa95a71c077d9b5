# utilkit

A small collection of everyday helpers, grouped by topic:

- `utilkit.convert` – parsing strings into numbers and booleans, hex and JSON
  handling, URL encoding, parsing (`ParsedUrl`) and building, CSV rows, byte
  sizes, colours and unit conversions.
- `utilkit.device` – recognising the kind of client (`DeviceType`: web, mobile,
  desktop, API) from a User-Agent string with `DeviceInfo.from_user_agent`.
- `utilkit.formatting` – currency, percentages, file sizes, durations, relative
  times, masked personal data, plain-text tables, progress bars, Markdown
  snippets, boxed text and ANSI colours.
- `utilkit.numeric` – primes, gcd/lcm, factorials, rounding to decimal places,
  ranges, simple statistics and base conversion.
- `utilkit.text` – blank checks, grapheme-aware truncation and padding, case
  conversion, extraction of numbers, e-mail addresses and URLs, validation,
  edit distance, templates, HTML stripping and escaping, and a stable 64-bit
  string hash.
- `utilkit.timeutil` – timestamps, formatting and parsing, calendar
  boundaries, time-zone conversion, daylight-saving checks, `TimeRange`,
  `TimezoneConverter` and a world clock.

## Installation

```
pip install utilkit
```

Python 3.10 or later is required. Time zones come from the standard
`zoneinfo` module, so the system's time-zone database must be available.

## Examples

```python
from utilkit import convert, formatting, numeric, text, timeutil
from utilkit.device import DeviceInfo

convert.str_to_bool("yes")                 # True
convert.hex_to_rgb("#FF0000")              # (255, 0, 0)
convert.human_readable_to_bytes("1 MB")    # 1048576
convert.csv_row_to_array('name,"a, b",123')  # ['name', 'a, b', '123']

formatting.format_currency(1234.56, "$", 2)    # '$1,234.56'
formatting.format_file_size(1024)              # '1.00 KB'
formatting.format_duration_en(3661)            # '1 hour, 1 minute, 1 second'
formatting.format_email_masked("test@example.com")  # 't****t@example.com'

numeric.is_prime(17)          # True
numeric.gcd(12, 8)            # 4
numeric.to_base(255, 16)      # 'FF'
numeric.from_base("FF", 16)   # 255

text.camel_to_snake("camelCase")                 # 'camel_case'
text.truncate_with_ellipsis("Hello World", 8)    # 'Hello...'
text.is_valid_email("someone@example.com")       # True

ua = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) Chrome/91.0 Safari/537.36"
DeviceInfo.from_user_agent(ua, None).device_key  # 'device:web'

timeutil.is_leap_year(2024)                      # True
shanghai = timeutil.timezone_by_name("北京")
timeutil.timezone_offset(timeutil.now_in_timezone(shanghai))  # 8
```

Functions that can fail on bad input raise an exception (mostly `ValueError`,
or `OverflowError` where a result leaves the unsigned 64-bit range); the
lenient parsers (`convert.str_to_i32`, `numeric.parse_f64` and friends) return
`None` instead.

## What it does not do

utilkit is a library of pure helper functions. It has no command-line tool, no
web server, no authentication and no cache or other storage: `DeviceInfo`
produces a `device_key` for telling sessions apart, but keeping those sessions
is left to the application.

## Running the tests

```
pip install "utilkit[test]"
pytest
```