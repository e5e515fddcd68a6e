from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./estimates.db"
    COMPANY_NAME: str = "Vasseur Fencing"
    LOG_LEVEL: str = "INFO"

    # Crew rate, same for every quote
    LABOR_RATE: float = 75.00

    # Per-quote pricing defaults (the estimate form can override these)
    MATERIAL_MARKUP_DEFAULT: float = 0.20  # fraction, 0.2 => +20%
    EQUIPMENT_FEE_DEFAULT: float = 400.00
    DELIVERY_FEE_DEFAULT: float = 150.00
    DISPOSAL_FEE_DEFAULT: float = 150.00

    # Storage area keys
    ESTIMATES_KEY: str = "fence_estimates_v1"
    ACTIVE_ESTIMATE_KEY: str = "fence_active_estimate_id_v1"

    class Config:
        env_file = ".env"


settings = Settings()
