from functools import lru_cache

from pydantic import AliasChoices, Field
from pydantic_settings import (
    BaseSettings,
    JsonConfigSettingsSource,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)


DADATA_PARTY_URL = "https://suggestions.dadata.ru/suggestions/api/4_1/rs/findById/party"


class Settings(BaseSettings):
    # Telegram
    telegram_bot_token: str = Field(
        min_length=1,
        validation_alias=AliasChoices("TelegramBotToken", "telegram_bot_token"),
    )
    telegram_webhook_secret: str = ""  # Optional: for webhook verification

    # DaData registry
    dadata_api_token: str = Field(
        min_length=1,
        validation_alias=AliasChoices("DaDataApiToken", "dadata_api_token"),
    )
    dadata_party_url: str = DADATA_PARTY_URL
    registry_timeout_seconds: float = Field(default=10.0, gt=0)
    lookup_concurrency: int = Field(default=5, ge=1, le=50)

    # /hello reply
    developer_info: str = "INN lookup bot.\nSend /help to see what it can do."

    # Environment
    environment: str = "development"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        json_file="tokens.json",
        json_file_encoding="utf-8",
        extra="ignore",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # tokens.json sits below env vars so deployments can override it
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            JsonConfigSettingsSource(settings_cls),
            file_secret_settings,
        )


@lru_cache()
def get_settings() -> Settings:
    return Settings()
