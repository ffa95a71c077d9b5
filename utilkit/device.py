"""Client device classification from User-Agent strings."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class DeviceType(Enum):
    """Kinds of client device; each kind may hold one active session."""

    WEB = "web"
    MOBILE = "mobile"
    DESKTOP = "desktop"
    API = "api"

    def __str__(self) -> str:
        return self.value


def parse_device_type(value: str) -> DeviceType:
    """Map a name to a device type, defaulting to API for unknown names."""
    try:
        return DeviceType(value.lower())
    except ValueError:
        return DeviceType.API


_MOBILE_MARKERS = ("mobile", "iphone", "ipad", "android", "blackberry", "windows phone")
_DESKTOP_MARKERS = ("electron", "desktop", "app")
_WEB_MARKERS = ("mozilla", "chrome", "safari", "firefox", "edge", "opera")

_OS_RULES = (
    (("windows nt 10.0",), "Windows 10"),
    (("windows nt 6.3",), "Windows 8.1"),
    (("windows nt 6.2",), "Windows 8"),
    (("windows nt 6.1",), "Windows 7"),
    (("windows",), "Windows"),
    (("mac os x", "macos"), "macOS"),
    (("linux",), "Linux"),
    (("android",), "Android"),
    (("ios", "iphone", "ipad"), "iOS"),
)


def _detect_device_type(ua: str) -> DeviceType:
    if any(marker in ua for marker in _MOBILE_MARKERS):
        return DeviceType.MOBILE
    if any(marker in ua for marker in _DESKTOP_MARKERS):
        return DeviceType.DESKTOP
    if any(marker in ua for marker in _WEB_MARKERS):
        return DeviceType.WEB
    return DeviceType.API


def _detect_os(ua: str) -> str | None:
    for markers, name in _OS_RULES:
        if any(marker in ua for marker in markers):
            return name
    return None


def _detect_browser(ua: str) -> str | None:
    if "firefox" in ua:
        return "Firefox"
    if "edg/" in ua:
        return "Microsoft Edge"
    if "chrome" in ua and "edg" not in ua:
        return "Chrome"
    if "safari" in ua and "chrome" not in ua:
        return "Safari"
    if "opera" in ua:
        return "Opera"
    return None


def _friendly_name(device_type: DeviceType, os_info: str | None, browser_info: str | None) -> str:
    if device_type is DeviceType.WEB:
        if browser_info and os_info:
            return f"{browser_info} on {os_info}"
        if browser_info:
            return browser_info
        if os_info:
            return f"Browser on {os_info}"
        return "Web Browser"
    if device_type is DeviceType.MOBILE:
        return f"{os_info} Device" if os_info else "Mobile Device"
    if device_type is DeviceType.DESKTOP:
        return f"Desktop App on {os_info}" if os_info else "Desktop App"
    return "API Client"


@dataclass
class DeviceInfo:
    """What is known about the device behind a session."""

    device_type: DeviceType
    device_name: str | None = None
    user_agent: str | None = None
    os_info: str | None = None
    browser_info: str | None = None

    @classmethod
    def from_user_agent(cls, user_agent: str, device_type_hint: str | None = None) -> DeviceInfo:
        """Build device info from a User-Agent, preferring an explicit type hint."""
        ua = user_agent.lower()
        if device_type_hint is not None:
            device_type = parse_device_type(device_type_hint)
        else:
            device_type = _detect_device_type(ua)
        os_info = _detect_os(ua)
        browser_info = _detect_browser(ua)
        return cls(
            device_type=device_type,
            device_name=_friendly_name(device_type, os_info, browser_info),
            user_agent=user_agent,
            os_info=os_info,
            browser_info=browser_info,
        )

    @classmethod
    def simple(cls, device_type: DeviceType, name: str | None = None) -> DeviceInfo:
        """Build device info carrying only a type and an optional name."""
        return cls(device_type=device_type, device_name=name)

    @property
    def device_key(self) -> str:
        """Key that separates sessions of different device types."""
        return f"device:{self.device_type}"

    @property
    def display_name(self) -> str:
        """The device name, or a name derived from the device type."""
        if self.device_name is not None:
            return self.device_name
        return f"{self.device_type} Device"