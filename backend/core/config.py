"""Application configuration via environment variables."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Project
    PROJECT_NAME: str = "CJ4 FADEC Controller"
    VERSION: str = "0.1.0"
    API_V1_STR: str = "/api/v1"
    LOG_LEVEL: str = "INFO"

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    RELOAD: bool = False

    # FADEC
    FADEC_ENABLED: bool = True
    UPDATE_INTERVAL_MS: float = 50.0
    DRAW_INTERVAL_S: float = 1.0 / 60.0
    RESET_PID_ON_MODE_CHANGE: bool = False

    # Flight data recorder
    RECORDER_ENABLED: bool = False
    RECORDER_DIR: str = "recordings"
    RECORDER_BUFFER_SIZE: int = 100
    RECORDER_MAX_EVENTS_PER_FILE: int = 20 * 60 * 15

    # CORS
    BACKEND_CORS_ORIGINS: list[str] = [
        "http://localhost:3000",
        "http://localhost:8000",
    ]

    class Config:
        env_file = ".env"
        case_sensitive = True

    @property
    def update_interval_s(self) -> float:
        return self.UPDATE_INTERVAL_MS / 1000.0


settings = Settings()
