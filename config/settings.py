from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
    )

    # JWT: no default, must be set in .env
    JWT_SECRET: str
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRE_MINUTES: int = 30

    # App
    APP_NAME: str = "Prediction Market AMM"
    DEBUG: bool = False  # Safe default for production; set DEBUG=True in .env for local dev
    LOG_LEVEL: str = "INFO"

    # Snowflake machine id for market/pool/position ids (0-1023)
    MACHINE_ID: int = 0

    # Exchange parameters (basis points / smallest asset unit)
    DEFAULT_POOL_FEE_BPS: int = 30
    MAX_TOTAL_FEE_BPS: int = 5000  # market treasury fee + pool fee
    MIN_SEED_AMOUNT: int = 2       # leaves both reserves > 0 after the 50/50 split


settings = Settings()
