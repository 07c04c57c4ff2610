"""
Semantic-version ranges as JavaScript toolchains read them (npm semver).

Covers what compiler selection needs: parsing versions, parsing range
expressions (caret, tilde, X-ranges, hyphen ranges, ``||`` unions) and
testing candidate versions against them.
"""

from __future__ import annotations

import operator
import re
from dataclasses import dataclass, field
from functools import total_ordering
from typing import Any, Iterable, List, Optional, Tuple

from infra.exceptions import InvalidRangeError, InvalidVersionError

_IDENT = r"[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*"
_XR = r"(?:0|[1-9]\d*|[xX*])"

_VERSION_RE = re.compile(
    r"^\s*[v=]*\s*"
    r"(?P<major>0|[1-9]\d*)\.(?P<minor>0|[1-9]\d*)\.(?P<patch>0|[1-9]\d*)"
    rf"(?:-(?P<prerelease>{_IDENT}))?"
    rf"(?:\+(?P<build>{_IDENT}))?\s*$"
)

_PARTIAL_RE = re.compile(
    rf"^[v=]*(?P<major>{_XR})"
    rf"(?:\.(?P<minor>{_XR})"
    rf"(?:\.(?P<patch>{_XR})"
    rf"(?:-(?P<prerelease>{_IDENT}))?"
    rf"(?:\+{_IDENT})?)?)?$"
)

_COMPARATOR_RE = re.compile(r"^(?P<op>~>|~|\^|>=|<=|>|<|=)?(?P<version>.*)$")
_OPERATOR_SPACE_RE = re.compile(r"(~>|~|\^|>=|<=|>|<|=)\s+")
_HYPHEN_RE = re.compile(r"\s+-\s+")

_OPERATORS = {
    "<": operator.lt,
    "<=": operator.le,
    ">": operator.gt,
    ">=": operator.ge,
    "=": operator.eq,
}


@total_ordering
@dataclass(frozen=True)
class Version:
    """A ``MAJOR.MINOR.PATCH[-prerelease][+build]`` version."""

    major: int
    minor: int
    patch: int
    prerelease: Tuple[str, ...] = ()
    build: Tuple[str, ...] = field(default=(), compare=False)

    @classmethod
    def parse(cls, text: Any) -> "Version":
        if isinstance(text, Version):
            return text
        if not isinstance(text, str):
            raise InvalidVersionError(f"Version must be a string, got {type(text).__name__}")

        match = _VERSION_RE.match(text)
        if not match:
            raise InvalidVersionError(f"Invalid semantic version: {text!r}")

        prerelease = match.group("prerelease")
        build = match.group("build")
        return cls(
            major=int(match.group("major")),
            minor=int(match.group("minor")),
            patch=int(match.group("patch")),
            prerelease=tuple(prerelease.split(".")) if prerelease else (),
            build=tuple(build.split(".")) if build else (),
        )

    @property
    def core(self) -> Tuple[int, int, int]:
        return (self.major, self.minor, self.patch)

    def _precedence(self) -> tuple:
        # Numeric identifiers sort before alphanumeric ones; a release sorts
        # after all of its pre-releases.
        identifiers = tuple(
            (0, int(part), "") if part.isdigit() else (1, 0, part)
            for part in self.prerelease
        )
        return self.core + ((0, identifiers) if self.prerelease else (1, ()),)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self._precedence() < other._precedence()

    def __str__(self) -> str:
        text = f"{self.major}.{self.minor}.{self.patch}"
        if self.prerelease:
            text += "-" + ".".join(self.prerelease)
        if self.build:
            text += "+" + ".".join(self.build)
        return text


@dataclass(frozen=True)
class Comparator:
    operator: str
    version: Version

    def test(self, version: Version) -> bool:
        return _OPERATORS[self.operator](version, self.version)

    def __str__(self) -> str:
        return f"{self.operator}{self.version}"


def _floor(major: int, minor: int, patch: int) -> Version:
    """Lowest possible version of a release line, i.e. ``M.m.p-0``."""
    return Version(major, minor, patch, ("0",))


def _parse_partial(text: str) -> Tuple[Optional[int], Optional[int], Optional[int], Tuple[str, ...]]:
    match = _PARTIAL_RE.match(text)
    if not match:
        raise InvalidRangeError(f"Invalid version in range: {text!r}")

    parts: List[Optional[int]] = []
    for name in ("major", "minor", "patch"):
        value = match.group(name)
        # Everything after a wildcard is a wildcard too: 1.x.3 means 1.x
        if value is None or value in ("x", "X", "*") or (parts and parts[-1] is None):
            parts.append(None)
        else:
            parts.append(int(value))

    prerelease = match.group("prerelease")
    return parts[0], parts[1], parts[2], tuple(prerelease.split(".")) if prerelease else ()


def _expand(op: str, text: str) -> List[Comparator]:
    """Desugar one range token into primitive comparators. Empty means any."""
    major, minor, patch, pre = _parse_partial(text)
    nothing = [Comparator("<", _floor(0, 0, 0))]

    if op in ("", "="):
        if major is None:
            return []
        if minor is None:
            return [Comparator(">=", Version(major, 0, 0)), Comparator("<", _floor(major + 1, 0, 0))]
        if patch is None:
            return [Comparator(">=", Version(major, minor, 0)), Comparator("<", _floor(major, minor + 1, 0))]
        return [Comparator("=", Version(major, minor, patch, pre))]

    if op == "^":
        if major is None:
            return []
        lower = Version(major, minor or 0, patch or 0, pre)
        if major > 0 or minor is None:
            upper = _floor(major + 1, 0, 0)
        elif minor > 0 or patch is None:
            upper = _floor(0, minor + 1, 0)
        else:
            upper = _floor(0, 0, patch + 1)
        return [Comparator(">=", lower), Comparator("<", upper)]

    if op in ("~", "~>"):
        if major is None:
            return []
        lower = Version(major, minor or 0, patch or 0, pre)
        upper = _floor(major + 1, 0, 0) if minor is None else _floor(major, minor + 1, 0)
        return [Comparator(">=", lower), Comparator("<", upper)]

    if op == ">":
        if major is None:
            return nothing
        if minor is None:
            return [Comparator(">=", Version(major + 1, 0, 0))]
        if patch is None:
            return [Comparator(">=", Version(major, minor + 1, 0))]
        return [Comparator(">", Version(major, minor, patch, pre))]

    if op == ">=":
        if major is None:
            return []
        return [Comparator(">=", Version(major, minor or 0, patch or 0, pre))]

    if op == "<":
        if major is None:
            return nothing
        if patch is None:
            return [Comparator("<", _floor(major, minor or 0, 0))]
        return [Comparator("<", Version(major, minor, patch, pre))]

    if op == "<=":
        if major is None:
            return []
        if minor is None:
            return [Comparator("<", _floor(major + 1, 0, 0))]
        if patch is None:
            return [Comparator("<", _floor(major, minor + 1, 0))]
        return [Comparator("<=", Version(major, minor, patch, pre))]

    raise InvalidRangeError(f"Unknown range operator: {op!r}")


def _expand_hyphen(low: str, high: str) -> List[Comparator]:
    comparators: List[Comparator] = []

    major, minor, patch, pre = _parse_partial(low)
    if major is not None:
        comparators.append(Comparator(">=", Version(major, minor or 0, patch or 0, pre)))

    major, minor, patch, pre = _parse_partial(high)
    if major is None:
        pass
    elif minor is None:
        comparators.append(Comparator("<", _floor(major + 1, 0, 0)))
    elif patch is None:
        comparators.append(Comparator("<", _floor(major, minor + 1, 0)))
    else:
        comparators.append(Comparator("<=", Version(major, minor, patch, pre)))
    return comparators


def _parse_set(text: str) -> Tuple[Comparator, ...]:
    text = _OPERATOR_SPACE_RE.sub(r"\1", text.strip())
    if not text:
        return ()

    bounds = _HYPHEN_RE.split(text)
    if len(bounds) == 2:
        return tuple(_expand_hyphen(*bounds))
    if len(bounds) > 2:
        raise InvalidRangeError(f"Invalid hyphen range: {text!r}")

    comparators: List[Comparator] = []
    for token in text.split():
        match = _COMPARATOR_RE.match(token)
        comparators.extend(_expand(match.group("op") or "", match.group("version")))
    return tuple(comparators)


def _set_allows(comparators: Tuple[Comparator, ...], version: Version) -> bool:
    if not all(c.test(version) for c in comparators):
        return False
    if not version.prerelease:
        return True
    # A pre-release only matches when the set opts into that exact release line
    return any(c.version.prerelease and c.version.core == version.core for c in comparators)


@dataclass(frozen=True)
class VersionRange:
    """Union of comparator sets, e.g. ``^0.8`` or ``>=0.6.0 <0.7.0 || ^0.8``."""

    raw: str
    sets: Tuple[Tuple[Comparator, ...], ...]

    @classmethod
    def parse(cls, text: Any) -> "VersionRange":
        if isinstance(text, VersionRange):
            return text
        if not isinstance(text, str):
            raise InvalidRangeError(f"Version range must be a string, got {type(text).__name__}")
        return cls(raw=text.strip(), sets=tuple(_parse_set(part) for part in text.split("||")))

    def satisfied_by(self, version: Any) -> bool:
        parsed = Version.parse(version)
        return any(_set_allows(comparators, parsed) for comparators in self.sets)

    def max_satisfying(self, versions: Iterable[Any]) -> Optional[Any]:
        """Highest candidate in the range, returned as given. Unparsable ones are skipped."""
        best = None
        best_version: Optional[Version] = None
        for candidate in versions:
            try:
                parsed = Version.parse(candidate)
            except InvalidVersionError:
                continue
            if not self.satisfied_by(parsed):
                continue
            if best_version is None or parsed > best_version:
                best, best_version = candidate, parsed
        return best

    def __str__(self) -> str:
        return self.raw
