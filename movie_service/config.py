from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    mongodb_uri: str = "mongodb://localhost:27017"
    mongo_db: str = "movies"
    host: str = "0.0.0.0"
    port: int = 5000
    log_level: str = "INFO"

    class Config:
        env_file = ".env"


settings = Settings()
