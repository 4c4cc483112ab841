from pydantic import BaseModel, ConfigDict, Field

from config.settings import HeraldSettings, settings


class DispatcherOptions(BaseModel):
    """Construction options of a CommandDispatcher."""

    model_config = ConfigDict(extra="forbid")

    prelude: str = ""
    cooldown: int | None = Field(default=None, ge=0, description="Milliseconds; None or 0 disables")
    strict_dates: bool = True
    reject_alias_collisions: bool = False
    track_in_flight: bool = False
    reply_on_argument_errors: bool = False

    @classmethod
    def from_settings(cls, source: HeraldSettings = settings, **overrides) -> "DispatcherOptions":
        values = {
            "prelude": source.prelude,
            "cooldown": source.cooldown_ms or None,
            "strict_dates": source.strict_dates,
            "reject_alias_collisions": source.reject_alias_collisions,
            "track_in_flight": source.track_in_flight,
            "reply_on_argument_errors": source.reply_on_argument_errors,
        }
        values.update(overrides)
        return cls(**values)
