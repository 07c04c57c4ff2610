from typing import Any, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator

# Plain string sentinel; the external toolchain reads it the same way.
WILDCARD_NETWORK_ID = "*"


class NetworkProfile(BaseModel):
    """Connection parameters for one development node."""

    # Keys such as gas, from or websockets belong to the external tool; keep them.
    model_config = ConfigDict(frozen=True, extra="allow")

    host: str
    port: int
    network_id: str = Field(
        default=WILDCARD_NETWORK_ID,
        validation_alias=AliasChoices("network_id", "networkId"),
    )

    @model_validator(mode="before")
    @classmethod
    def _single_network_id(cls, data: Any) -> Any:
        # The alias must not survive as an extra key next to the real one
        if isinstance(data, dict) and "network_id" in data and "networkId" in data:
            if str(data["network_id"]) != str(data["networkId"]):
                raise ValueError(
                    f"network_id {data['network_id']!r} conflicts with networkId {data['networkId']!r}"
                )
            data = {k: v for k, v in data.items() if k != "networkId"}
        return data

    @field_validator("network_id", mode="before")
    @classmethod
    def _network_id_as_str(cls, value: Any) -> Any:
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    @property
    def is_wildcard(self) -> bool:
        return self.network_id == WILDCARD_NETWORK_ID

    @property
    def url(self) -> str:
        return f"http://{self.host}:{self.port}"

    def accepts(self, network_id: Union[str, int]) -> bool:
        """True if a node reporting ``network_id`` may be used with this profile."""
        return self.is_wildcard or self.network_id == str(network_id)
