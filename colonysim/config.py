from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="COLONYSIM_", env_file=".env", extra="ignore")

    app_title: str = "Colony Simulation Core"
    log_level: str = "INFO"
    # Number of events kept in each colony's rolling log
    recent_event_limit: int = 20
    # Scale job output by the productivity of the pops actually working it
    pop_productivity_scales_output: bool = True


settings = Settings()
