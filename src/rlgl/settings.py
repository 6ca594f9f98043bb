from pydantic_settings import BaseSettings, SettingsConfigDict


class RlglSettings(BaseSettings):
    """Runtime knobs read from RLGL_* environment variables or a .env file."""

    model_config = SettingsConfigDict(env_prefix="RLGL_", env_file=".env", extra="ignore")

    log_level: str = "WARNING"
    # Overrides the located session config path when set.
    config_path: str = ""
