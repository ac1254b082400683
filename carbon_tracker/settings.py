import os
from pydantic import BaseModel, Field
from dotenv import load_dotenv

# load .env once at startup
load_dotenv()


class Settings(BaseModel):
    database_url: str = Field(default="sqlite:///./carbon_footprint.db", alias="DATABASE_URL")
    jwt_secret: str = Field(default="your_jwt_secret", alias="JWT_SECRET")
    jwt_expires_minutes: int = Field(default=24 * 60, alias="JWT_EXPIRES_MINUTES")

    emissions_provider: str = Field(default="climatiq", alias="EMISSIONS_PROVIDER")
    climatiq_api_key: str | None = Field(default=None, alias="CLIMATIQ_API_KEY")
    climatiq_api_url: str = Field(
        default="https://api.climatiq.io/data/v1/estimate", alias="CLIMATIQ_API_URL"
    )
    climatiq_data_version: str = Field(default="21.21", alias="CLIMATIQ_DATA_VERSION")
    carbon_interface_api_key: str | None = Field(default=None, alias="CARBON_INTERFACE_API_KEY")
    carbon_interface_api_url: str = Field(
        default="https://www.carboninterface.com/api/v1/estimates",
        alias="CARBON_INTERFACE_API_URL",
    )
    provider_timeout_seconds: float = Field(default=10.0, alias="PROVIDER_TIMEOUT_SECONDS")

    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    @classmethod
    def from_env(cls):
        data = {
            key: os.getenv(key)
            for key in (
                "DATABASE_URL",
                "JWT_SECRET",
                "JWT_EXPIRES_MINUTES",
                "EMISSIONS_PROVIDER",
                "CLIMATIQ_API_KEY",
                "CLIMATIQ_API_URL",
                "CLIMATIQ_DATA_VERSION",
                "CARBON_INTERFACE_API_KEY",
                "CARBON_INTERFACE_API_URL",
                "PROVIDER_TIMEOUT_SECONDS",
                "LOG_LEVEL",
            )
        }
        # unset variables fall back to the field defaults
        return cls.model_validate({k: v for k, v in data.items() if v is not None})


settings = Settings.from_env()
