from pydantic_settings import BaseSettings, SettingsConfigDict


class N1QLBaseSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_nested_delimiter="__"
    )

    @classmethod
    def get_env_prefix(cls) -> str:
        """Get the environment variable prefix for this settings class.

        Override this method in subclasses that use a custom ``env_prefix``
        so callers can report which variables are consulted.

        Returns:
            str: Environment variable prefix (empty string for base class)
        """
        return ""
