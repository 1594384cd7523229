"""Message interpolation configuration settings."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class InterpolationSettings(BaseSettings):
    """Validated value interpolation settings."""

    DEFAULT_LOCALE: str = Field(
        default="en-US", alias="INTERPOLATION_DEFAULT_LOCALE"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )


class Settings(BaseSettings):
    """Message interpolation configuration settings."""

    PREFIX: str = ""
    LOG_LEVEL: str = "INFO"
    GIT_SHA: str = "Unknown"

    interpolation: InterpolationSettings

    @property
    def is_production(self) -> bool:
        """Check if the application is running in production."""
        return not bool(self.PREFIX)

    def __init__(self, **kwargs):
        settings_map = {
            "interpolation": InterpolationSettings,
        }

        for setting_name, setting_class in settings_map.items():
            if setting_name not in kwargs:
                kwargs[setting_name] = setting_class()

        super().__init__(**kwargs)

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )


# Create the settings instance
settings = Settings()
