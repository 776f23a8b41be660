"""Runtime settings for nmprune."""

from pydantic import BaseModel, Field

from nmprune.fs import default_concurrency

ENV_PREFIX = "NMPRUNE_"


class Settings(BaseModel):
    """Settings for a single run, built from command line options."""

    max_concurrency: int = Field(
        default_factory=default_concurrency,
        ge=1,
        description="Maximum in-flight filesystem operations during a scan",
    )
    verbose: bool = Field(False, description="Enable debug logging")

    @classmethod
    def from_options(cls, concurrency: int | None = None, verbose: bool = False) -> "Settings":
        """Build settings, leaving unset options at their defaults."""
        values: dict = {"verbose": verbose}
        if concurrency is not None:
            values["max_concurrency"] = concurrency
        return cls(**values)
