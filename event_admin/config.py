import os
from pathlib import Path

from pydantic import BaseModel, Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    TomlConfigSettingsSource,
)

_CONFIG_PATH = os.getenv("EVENT_ADMIN_CONFIG", "config.toml")
_ENV_PATH = os.getenv("EVENT_ADMIN_ENV", ".env")


class JWTSettings(BaseModel):
    secret_key: str
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24 * 30


class EventsSettings(BaseModel):
    # categories shown on the events screen are the ones tagged with this page type
    category_page_type: str = "events"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_nested_delimiter="__",
        toml_file=_CONFIG_PATH,
        env_file=_ENV_PATH,
    )

    database_url: str
    database_echo: bool = False
    master_token: str
    jwt: JWTSettings
    events: EventsSettings = Field(default_factory=EventsSettings)

    logs_dir: Path = Field(default=Path("logs"))
    host: str = "0.0.0.0"
    port: int = 8000

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # Source order: init args > OS env > .env > config.toml > secrets
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            TomlConfigSettingsSource(settings_cls),
            file_secret_settings,
        )


settings = Settings()  # type: ignore We want the app to fail if the settings are not loaded correctly
