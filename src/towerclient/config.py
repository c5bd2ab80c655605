import logging
import structlog
import pydantic
from pydantic_settings import BaseSettings, SettingsConfigDict


class Config(BaseSettings):
    base_url: str = pydantic.Field(
        description="API root, e.g. https://tower.example.com/api/v2/.",
    )
    username: str | None = pydantic.Field(
        None,
        description="User for basic authentication.",
    )
    password: str | None = pydantic.Field(
        None,
        description="Password for basic authentication.",
    )
    verify_ssl: bool = pydantic.Field(
        True,
        description="Verify TLS certificates.",
    )
    timeout: float = pydantic.Field(
        30.0,
        description="Request timeout in seconds.",
    )
    retries: int = pydantic.Field(
        0,
        description="Connection retries made by the HTTP transport.",
    )
    log_level: str = pydantic.Field(
        "info",
        description="Logging level.",
    )
    log_file: str = pydantic.Field(
        "STDOUT",
        description="Path to the log file.",
    )
    log_format: str = pydantic.Field(
        "text",
        description="Log format.",
    )
    model_config = SettingsConfigDict(env_prefix="towerclient_")


def load_config(**overrides) -> Config:
    config = Config(**overrides)
    # configure log output
    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(),
    ]
    if config.log_format == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    if config.log_file == "STDOUT":
        factory = structlog.PrintLoggerFactory()
    else:
        factory = structlog.PrintLoggerFactory(file=open(config.log_file, "a"))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelNamesMapping()[config.log_level.upper()]
        ),
        logger_factory=factory,
    )
    return config
