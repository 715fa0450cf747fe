from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    bot_token: str | None = None
    private_chat_id: str | None = None
    group_chat_id: str | None = None

    telegram_api_base: str = "https://api.telegram.org"
    telegram_timeout: float = 10.0
    message_limit: int = 4096
    chunk_delay: float = 0.1  # seconds between chunks of one message

    report_timezone: str = "UTC"
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 8000

    def missing_credentials(self) -> list[str]:
        required = {
            "BOT_TOKEN": self.bot_token,
            "PRIVATE_CHAT_ID": self.private_chat_id,
            "GROUP_CHAT_ID": self.group_chat_id,
        }
        return [name for name, value in required.items() if not value]

@lru_cache
def get_settings() -> Settings:
    return Settings()
