"""Helpers for talking to devices through ``adb`` and reading its output."""

from __future__ import annotations

import re

_UNAUTHORIZED_MARKER = "error: device unauthorized"

ADB_DEVICE_REGEX = re.compile(r"^(\S{6,22})\tdevice\b", re.MULTILINE)
_NAME_REGEX = re.compile(r"\bname: (?P<name>.*)")


class RunCheckedError(Exception):
    """Running an ``adb`` command failed."""


class UnauthorizedError(RunCheckedError):
    """The device has not yet authorized USB debugging from this computer."""

    def __init__(self) -> None:
        super().__init__(
            "This device doesn't yet trust this computer. On the device, you should "
            'see a prompt like "Allow USB debugging?". Pressing "Allow" should fix this.'
        )


class DeviceNameNotMatched(LookupError):
    """The device name could not be found in ``dumpsys`` output."""

    def __init__(self) -> None:
        super().__init__("Name regex didn't match anything.")


def adb_args(serial_no: str, *args: str) -> list[str]:
    """Command line for running ``adb`` against the device ``serial_no``."""
    return ["adb", "-s", serial_no, *args]


def check_authorized(stderr: str | bytes | None) -> None:
    """Raise if the error output of a failed ``adb`` command signals an unauthorized device.

    Raises ``RunCheckedError`` if ``stderr`` is bytes that are not valid UTF-8,
    and ``UnauthorizedError`` if the device refused the connection.
    """
    if stderr is None:
        return
    if isinstance(stderr, bytes):
        try:
            stderr = stderr.decode("utf-8")
        except UnicodeDecodeError as err:
            raise RunCheckedError(f"stderr contained invalid UTF-8: {err}") from err
    if _UNAUTHORIZED_MARKER in stderr:
        raise UnauthorizedError()


def parse_device_serials(output: str) -> list[str]:
    """Serial numbers of the ready devices listed in ``adb devices`` output, in order."""
    return [match.group(1) for match in ADB_DEVICE_REGEX.finditer(output)]


def parse_device_name(output: str) -> str:
    """The device name from ``adb shell dumpsys bluetooth_manager`` output."""
    match = _NAME_REGEX.search(output)
    if match is None:
        raise DeviceNameNotMatched()
    return match["name"]


def parse_prop(output: str) -> str:
    """The value printed by ``adb shell getprop <prop>``."""
    return output.strip()