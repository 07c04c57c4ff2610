from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field, model_validator

from infra.exceptions import CompilerNotFoundError, NetworkNotFoundError
from .compiler import CompilerSpec
from .network import NetworkProfile


def _tuples_as_lists(value: Any) -> Any:
    if isinstance(value, dict):
        return {k: _tuples_as_lists(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_tuples_as_lists(v) for v in value]
    return value


class ConfigRoot(BaseModel):
    """
    Whole toolchain configuration: network profiles and compilers by name.

    No profile is required here. Whether the default network exists is
    for the consuming tool to decide.
    """

    model_config = ConfigDict(frozen=True, extra="allow")

    networks: Dict[str, NetworkProfile] = Field(default_factory=dict)
    compilers: Dict[str, CompilerSpec] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def _plain_sequences(cls, data: Any) -> Any:
        # Dumped configs come back with lists; keep loaded ones comparable
        return _tuples_as_lists(data)

    def network(self, name: str) -> NetworkProfile:
        try:
            return self.networks[name]
        except KeyError:
            raise NetworkNotFoundError(
                f"Network {name!r} is not defined (known: {sorted(self.networks)})"
            ) from None

    def compiler(self, name: str) -> CompilerSpec:
        try:
            return self.compilers[name]
        except KeyError:
            raise CompilerNotFoundError(
                f"Compiler {name!r} is not defined (known: {sorted(self.compilers)})"
            ) from None

    def to_dict(self) -> Dict[str, Any]:
        """Plain-data form, unknown keys included."""
        return self.model_dump()
