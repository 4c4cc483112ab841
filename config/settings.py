from pydantic import Field
from pydantic_settings import BaseSettings


class HeraldSettings(BaseSettings):
    prelude: str = Field(default="", description="Text a message must start with to invoke a command")
    cooldown_ms: int = Field(default=0, ge=0, description="Per-command cooldown in milliseconds (0 disables)")

    # Argument handling
    strict_dates: bool = Field(default=True, description="Fail invocations whose Date args do not parse")
    reply_on_argument_errors: bool = Field(
        default=False, description="Reply to the message when arguments are missing or invalid"
    )

    # Registration
    reject_alias_collisions: bool = Field(
        default=False, description="Refuse to register two commands sharing a keyword"
    )

    # Cooldown
    track_in_flight: bool = Field(
        default=False, description="Treat commands that are still executing as cooling down"
    )

    log_level: str = Field(default="INFO", description="Logging level")

    class Config:
        env_prefix = "HERALD_"
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"


# Global settings instance
settings = HeraldSettings()
