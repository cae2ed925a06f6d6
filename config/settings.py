from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # --- OpenAI ---
    OPENAI_MODEL: str = "gpt-4o"

    # --- Azure OpenAI ---
    AZURE_OPENAI_API_VERSION: str = "2024-10-21"
    AZURE_OPENAI_ENDPOINT_TEMPLATE: str = "https://{resource_name}.openai.azure.com"

    # --- Storage ---
    PLATFORMS_FILE: str = "tmp/platforms.json"

    # --- Icons ---
    ICON_CDN_BASE: str = "https://cdn.activepieces.com/pieces/ai/code"
    ICON_HISTORY_MAX_TURNS: int = 10
    ICON_HISTORY_MAX_TOKENS: int = 4000

    # --- Logging ---
    LOG_FILE: str = "tmp/log.txt"
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


settings = Settings()
