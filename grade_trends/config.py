from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="GRADE_TRENDS_", env_file=".env", extra="ignore")

    # Targets shown in the per-class summary (percent of the final grade)
    passing_target: float = 50.0
    top_target: float = 90.0

    log_level: str = "INFO"


settings = Settings()
