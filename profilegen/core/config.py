# profilegen/core/config.py

from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    API_KEY: str = ""
    USE_API_KEY: bool = False
    APP_TITLE: str = "GUI.for.Clash"
    BASE_DIR: str = "."
    KERNEL_CONFIG_PATH: str = "data/kernel/config.yaml"
    RULESETS_DIR: str = "data/rulesets"
    SUBSCRIBES_FILE: str = "data/subscribes.yaml"
    RULESETS_FILE: str = "data/rulesets.yaml"
    # Generated config lives one level below the storage root
    STORAGE_PREFIX: str = "data/"
    PROVIDER_PATH_PREFIX: str = "../"
    HEALTH_CHECK_URL: str = "https://www.gstatic.com/generate_204"
    HEALTH_CHECK_INTERVAL: int = 300
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

settings = Settings()
