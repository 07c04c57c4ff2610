from typing import Any, Iterable

from pydantic import BaseModel, ConfigDict, field_validator

from devchain.core.semver import VersionRange
from infra.exceptions import NoMatchingVersionError


class CompilerSpec(BaseModel):
    """
    Compiler selection: a semantic-version range such as ``^0.8``.

    The range is parsed on use, not on construction, so a malformed
    expression is carried as-is until someone asks for a version.
    """

    # settings, docker, parser and the like are passed through untouched
    model_config = ConfigDict(frozen=True, extra="allow")

    version: str

    @field_validator("version", mode="before")
    @classmethod
    def _version_as_str(cls, value: Any) -> Any:
        # Unquoted YAML such as `version: 0.8` arrives as a number
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value

    @property
    def version_range(self) -> VersionRange:
        return VersionRange.parse(self.version)

    def allows(self, version: Any) -> bool:
        return self.version_range.satisfied_by(version)

    def select(self, available: Iterable[Any]) -> Any:
        """
        Pick the newest of ``available`` that the range allows.

        Raises:
            NoMatchingVersionError: nothing in ``available`` satisfies the range
        """
        chosen = self.version_range.max_satisfying(available)
        if chosen is None:
            raise NoMatchingVersionError(f"No available compiler version satisfies {self.version!r}")
        return chosen
