from pydantic_settings import BaseSettings
from pydantic import Field


class RuntimeConfig(BaseSettings):
    LOG_LEVEL: str = Field(default="INFO")
    # File loaded by load_config() when no source is given
    CONFIG_PATH: str | None = Field(default=None)

    class Config:
        env_prefix = "DEVCHAIN_"
        case_sensitive = False
        env_ignore_empty = True
