from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    database_url: str = "sqlite+pysqlite:///./ticket_gate.db"
    secret_key: str
    jwt_algorithm: str = "HS256"
    debug: bool = False
    scan_history_limit: int = 20
    ticket_code_attempts: int = 10

    model_config = SettingsConfigDict(env_file=".env", env_prefix="")


settings = Settings()
