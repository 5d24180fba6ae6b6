from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    全局配置，从 .env 中读取。
    """

    # 构建触发 API
    BITRISE_API_BASE_URL: str = "https://app.bitrise.io"
    TRIGGER_API_TIMEOUT_S: float = 30.0

    # 日志级别
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    """
    获取全局单例配置实例。
    """
    return Settings()
