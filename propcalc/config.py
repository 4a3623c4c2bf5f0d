from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    # App
    app_name: str = "PropCalc"
    debug: bool = False
    log_level: str = "INFO"
    cors_origins: list[str] = ["*"]

    # Deal archive
    deal_db_path: str = "data/deals.db"

    # Deal sessions
    session_header: str = "X-Session-Id"
    default_session: str = "anonymous"
    max_sessions: int = 1000


settings = Settings()
