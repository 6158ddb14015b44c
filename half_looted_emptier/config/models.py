"""
Pydantic-based configuration models for Half Looted Emptier.

EmptierConfig mirrors the JSON configuration file the plugin keeps next to
the host's other plugin configs; the field aliases are the keys written on
disk. PluginSettings holds the runtime settings read from the environment.
"""

from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings

from .. import __version__
from ..models.trigger_policy import EmptyAction, TriggerMode, TriggerPolicy, build_trigger_policy
from ..structured_logging.enhanced_logging_config import get_logger

logger = get_logger(__name__)


class EmptierConfig(BaseModel):
    """Versioned plugin configuration record."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore", validate_assignment=True)

    version: str = Field(default=__version__, alias="Version", description="Config schema version")
    emptying_trigger_mode: TriggerMode = Field(
        default=TriggerMode.LOOTED,
        alias="Emptying Trigger Mode",
        description="Remaining: trigger on items left; Looted: trigger on items taken",
    )
    number_of_items_to_trigger_emptying: int = Field(
        default=1,
        ge=1,
        alias="Number Of Items To Trigger Emptying",
        description="Item count threshold for the trigger mode",
    )
    delay_before_emptying_container_seconds: float = Field(
        default=30.0,
        ge=0,
        alias="Delay Before Emptying Container Seconds",
        description="Seconds between closing the container and emptying it",
    )
    remove_items_instead_of_dropping: bool = Field(
        default=False,
        alias="Remove Items Instead Of Dropping",
        description="Delete leftover items instead of dropping them on the ground",
    )

    @field_validator("emptying_trigger_mode", mode="before")
    @classmethod
    def validate_trigger_mode(cls, v: Any) -> Any:
        """Accept trigger mode names in any letter case."""
        if isinstance(v, str):
            for mode in TriggerMode:
                if mode.value.lower() == v.strip().lower():
                    return mode
            logger.error("Invalid emptying trigger mode", mode=v, valid_modes=[m.value for m in TriggerMode])
        return v

    def trigger_policy(self) -> TriggerPolicy:
        """Build the trigger policy this configuration selects."""
        return build_trigger_policy(self.emptying_trigger_mode, self.number_of_items_to_trigger_emptying)

    def empty_action(self) -> EmptyAction:
        """Build the empty action this configuration selects."""
        return EmptyAction(
            delay_seconds=self.delay_before_emptying_container_seconds,
            remove_instead_of_drop=self.remove_items_instead_of_dropping,
        )

    def to_file_dict(self) -> dict[str, Any]:
        """Serialize with the on-disk key names."""
        return self.model_dump(mode="json", by_alias=True)


def default_config() -> EmptierConfig:
    """Return the configuration a fresh install starts with."""
    return EmptierConfig()


class PluginSettings(BaseSettings):
    """Runtime settings read from HALF_LOOTED_EMPTIER_* environment variables."""

    config_path: Path = Field(
        default=Path("config") / "HalfLootedEmptier.json",
        description="Location of the plugin configuration file",
    )
    log_level: str = Field(default="INFO", description="Log level")
    environment: str = Field(default="local", description="Logging environment")
    log_file: Path | None = Field(default=None, description="Optional file that receives a copy of the log")

    @field_validator("log_level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Log level must be one of {valid_levels}, got '{v}'")
        return v_upper

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Validate logging environment."""
        valid_environments = ["local", "unit_test", "production"]
        if v not in valid_environments:
            logger.error("Invalid logging environment", environment=v, valid_environments=valid_environments)
            raise ValueError(f"Environment must be one of {valid_environments}, got '{v}'")
        return v

    model_config = {"env_prefix": "HALF_LOOTED_EMPTIER_", "case_sensitive": False, "extra": "ignore"}
