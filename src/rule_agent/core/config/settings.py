"""
Environment-driven settings that compose the Rule Agent configuration.
"""

import logging
import os
from dataclasses import dataclass

import structlog
from dotenv import load_dotenv

from rule_agent.core.config.check_config import FixtureConfig, RuleAgentConfig
from rule_agent.core.config.presets import preset_config

# Load environment variables from a .env file
load_dotenv()


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    file_path: str | None = None


class Settings:
    """Process settings read from the environment."""

    def __init__(self) -> None:
        self.preset = os.getenv("RULE_AGENT_PRESET") or None
        self.fixtures_dir = os.getenv("RULE_AGENT_FIXTURES_DIR") or None
        timeout = os.getenv("RULE_AGENT_TIMEOUT")
        self.execution_timeout = float(timeout) if timeout else None

        self.logging = LoggingConfig(
            level=os.getenv("LOG_LEVEL", "INFO"),
            format=os.getenv("LOG_FORMAT", "%(asctime)s - %(name)s - %(levelname)s - %(message)s"),
            file_path=os.getenv("LOG_FILE_PATH"),
        )

        # Development settings
        self.debug = os.getenv("DEBUG", "false").lower() == "true"
        self.environment = os.getenv("ENVIRONMENT", "development")

    def agent_config(self) -> RuleAgentConfig:
        """Build a fresh RuleAgentConfig from these settings."""
        config = preset_config(self.preset) if self.preset else RuleAgentConfig()
        if self.fixtures_dir:
            config.fixtures = FixtureConfig.from_dir(self.fixtures_dir)
        if self.execution_timeout is not None:
            config.execution_timeout = self.execution_timeout
        return config


def configure_logging(logging_config: LoggingConfig | None = None) -> None:
    """Configure stdlib logging and route structlog through it."""
    logging_config = logging_config or settings.logging
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if logging_config.file_path:
        handlers.append(logging.FileHandler(logging_config.file_path))

    logging.basicConfig(
        level=getattr(logging, logging_config.level.upper(), logging.INFO),
        format=logging_config.format,
        handlers=handlers,
    )
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.KeyValueRenderer(key_order=["event"]),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


# Global settings instance
settings = Settings()
