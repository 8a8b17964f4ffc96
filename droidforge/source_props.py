"""Reading of ``source.properties`` files shipped with the Android SDK and NDK."""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path

_WHITESPACE = " \t\f"
_SEPARATORS = "=:" + _WHITESPACE
_SIMPLE_ESCAPES = {"t": "\t", "n": "\n", "r": "\r", "f": "\f"}

# Referenced from `$NDK_HOME/build/cmake/android.toolchain.cmake`
_REVISION_RE = re.compile(
    r"(?P<version>(?P<major>[0-9]+)\.(?P<minor>[0-9]+)\.(?P<patch>[0-9]+)"
    r"(-beta(?P<beta>[0-9]+))?)"
)


class RevisionError(ValueError):
    """A revision string could not be parsed."""


class PkgError(ValueError):
    """The ``Pkg`` section of a properties file is missing or invalid."""


class SourcePropsError(Exception):
    """A ``source.properties`` file could not be read or understood."""


def _ends_with_continuation(line: str) -> bool:
    trailing = len(line) - len(line.rstrip("\\"))
    return trailing % 2 == 1


def _unescape(text: str) -> str:
    out = []
    chars = iter(enumerate(text))
    for index, char in chars:
        if char != "\\":
            out.append(char)
            continue
        step = next(chars, None)
        if step is None:
            break
        _, escaped = step
        if escaped == "u":
            digits = text[index + 2 : index + 6]
            if len(digits) != 4 or not all(c in "0123456789abcdefABCDEF" for c in digits):
                raise ValueError(f"malformed \\u escape in {text!r}")
            out.append(chr(int(digits, 16)))
            for _ in range(4):
                next(chars, None)
        else:
            out.append(_SIMPLE_ESCAPES.get(escaped, escaped))
    return "".join(out)


def _split_entry(line: str) -> tuple[str, str]:
    end = 0
    while end < len(line):
        char = line[end]
        if char == "\\":
            end += 2
            continue
        if char in _SEPARATORS:
            break
        end += 1
    key = line[:end]
    rest = line[end:].lstrip(_WHITESPACE)
    if rest and rest[0] in "=:":
        rest = rest[1:].lstrip(_WHITESPACE)
    return key, rest


def parse_properties(text: str) -> dict[str, str]:
    """Parse Java ``.properties`` text into a dictionary.

    Raises ``ValueError`` on a malformed unicode escape.
    """
    props: dict[str, str] = {}
    lines = iter(text.splitlines())
    for raw in lines:
        line = raw.lstrip(_WHITESPACE)
        if not line or line[0] in "#!":
            continue
        while _ends_with_continuation(line):
            line = line[:-1]
            following = next(lines, None)
            if following is None:
                break
            line += following.lstrip(_WHITESPACE)
        key, value = _split_entry(line)
        props[_unescape(key)] = _unescape(value)
    return props


@dataclass(frozen=True, order=True)
class VersionTriple:
    major: int
    minor: int
    patch: int

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"


@dataclass(frozen=True)
class Revision:
    triple: VersionTriple
    beta: int | None = None

    @classmethod
    def parse(cls, revision: str) -> Revision:
        """Find and parse a ``major.minor.patch[-betaN]`` revision in ``revision``."""
        match = _REVISION_RE.search(revision)
        if match is None:
            raise RevisionError(f"Failed to match regex in string {revision!r}")
        triple = VersionTriple(
            int(match["major"]), int(match["minor"]), int(match["patch"])
        )
        beta = match["beta"]
        return cls(triple, int(beta) if beta is not None else None)

    def __str__(self) -> str:
        text = str(self.triple)
        if self.beta is not None:
            text += f"-beta{self.beta}"
        return text


@dataclass(frozen=True)
class Pkg:
    revision: Revision

    @classmethod
    def from_props(cls, props: dict[str, str]) -> Pkg:
        try:
            raw = props["Pkg.Revision"]
        except KeyError:
            raise PkgError("`Pkg.Revision` missing.") from None
        try:
            revision = Revision.parse(raw)
        except RevisionError as err:
            raise PkgError(f"Failed to parse `Pkg.Revision`: {err}") from err
        return cls(revision)


@dataclass(frozen=True)
class SourceProps:
    pkg: Pkg

    @classmethod
    def from_path(cls, path: str | Path) -> SourceProps:
        path = Path(path)
        try:
            text = path.read_text(encoding="latin-1")
        except OSError as err:
            raise SourcePropsError(f'Failed to open "{path}": {err}') from err
        try:
            props = parse_properties(text)
        except ValueError as err:
            raise SourcePropsError(f'Failed to parse "{path}": {err}') from err
        try:
            pkg = Pkg.from_props(props)
        except PkgError as err:
            raise SourcePropsError(f'Failed to parse `Pkg` in "{path}": {err}') from err
        return cls(pkg)