from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_prefix": "WORLDBENCH_"}

    database_url: str = "sqlite+aiosqlite:///world.db"
    echo_sql: bool = False
    seed_on_startup: bool = True
    log_level: str = "INFO"


settings = Settings()
