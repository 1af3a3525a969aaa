"""Root settings model for otelkit configuration."""

from pydantic import Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    TomlConfigSettingsSource,
)

from otelkit.config.loader import config_files
from otelkit.config.models.observability import ObservabilityConfig


class Settings(BaseSettings):
    """Service identity and observability configuration.

    Configuration is loaded in this order:
    1. Pydantic model defaults (in code)
    2. config/default.toml (base configuration)
    3. config/{OTELKIT_ENV}.toml (environment overrides)
    4. OTELKIT_* environment variables (runtime overrides)
    5. Constructor arguments
    """

    model_config = SettingsConfigDict(
        env_prefix="OTELKIT_",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    service_name: str = Field(
        default="otelkit",
        min_length=1,
        description="Service name used for the tracer, meter and resource",
    )
    service_version: str | None = Field(default=None, description="Service version")
    service_instance_id: str | None = Field(
        default=None,
        description="Unique instance identifier reported on the resource",
    )

    observability: ObservabilityConfig = Field(
        default_factory=ObservabilityConfig,
        description="Observability configuration",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,  # noqa: ARG003
        file_secret_settings: PydanticBaseSettingsSource,  # noqa: ARG003
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Read constructor arguments, then env vars, then the TOML files.

        Each file gets its own source so nested tables from the
        environment file are merged into default.toml key by key.
        """
        toml_sources = tuple(
            TomlConfigSettingsSource(settings_cls, toml_file=path) for path in config_files()
        )
        return (init_settings, env_settings, *toml_sources)
