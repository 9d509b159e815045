#!/usr/bin/env python3
"""
Configuration Management for Waybill Sync

Handles environment-based configuration with explicit defaults and validation.
The reconciliation job never reads configuration on its own: the CLI builds a
Config once and hands the JobConfig section to the job at construction time.
"""

import logging
import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from dotenv import load_dotenv

from .models import OrderStatus

# Load environment variables from .env file
load_dotenv()

APP_NAME = "Waybill Sync"


class Environment(Enum):
    """Application environment types."""

    DEVELOPMENT = "development"
    TEST = "test"
    PRODUCTION = "production"


@dataclass
class JobConfig:
    """Per-store settings handed to each reconciliation job."""

    store_id: str
    vendor_id: str | None = None
    order_status: OrderStatus = OrderStatus.INSTRUCT
    lookback_days: int = 0  # Trailing window for order fetches, 0 disables it


@dataclass
class MessagingConfig:
    """Collaborator endpoints, one per queue."""

    onch_url: str = "http://localhost:3001"
    coupang_url: str = "http://localhost:3002"
    mail_url: str = "http://localhost:3003"
    onch_queue: str = "onch-queue"
    coupang_queue: str = "coupang-queue"
    mail_queue: str = "mail-queue"
    timeout: float = 30.0

    def queue_urls(self) -> dict[str, str]:
        """Map each queue name to its service base URL."""
        return {
            self.onch_queue: self.onch_url,
            self.coupang_queue: self.coupang_url,
            self.mail_queue: self.mail_url,
        }


@dataclass
class Config:
    """
    Main configuration class for the waybill sync service.

    Loads configuration from environment variables with defaults
    and validation for each environment type.
    """

    environment: Environment
    job: JobConfig
    messaging: MessagingConfig = field(default_factory=MessagingConfig)

    # Application settings
    debug: bool = False
    log_level: str = "INFO"

    @classmethod
    def from_environment(cls) -> "Config":
        """Create configuration from environment variables."""
        env = Environment(os.getenv("WAYBILL_SYNC_ENV", "development"))

        job = JobConfig(
            store_id=os.getenv("STORE", ""),
            vendor_id=os.getenv("VENDOR_ID") or None,
            order_status=OrderStatus(os.getenv("ORDER_STATUS", OrderStatus.INSTRUCT.value).upper()),
            lookback_days=int(os.getenv("ORDER_LOOKBACK_DAYS", "0")),
        )

        messaging = MessagingConfig(
            onch_url=os.getenv("ONCH_SERVICE_URL", "http://localhost:3001"),
            coupang_url=os.getenv("COUPANG_SERVICE_URL", "http://localhost:3002"),
            mail_url=os.getenv("MAIL_SERVICE_URL", "http://localhost:3003"),
            timeout=float(os.getenv("MESSAGING_TIMEOUT", "30")),
        )

        return cls(
            environment=env,
            job=job,
            messaging=messaging,
            debug=os.getenv("DEBUG", "false").lower() == "true",
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )

    def validate(self) -> list:
        """Validate configuration and return list of errors."""
        errors = []

        if self.environment == Environment.PRODUCTION and not self.job.store_id:
            errors.append("STORE is required in production")

        if self.job.lookback_days < 0:
            errors.append("ORDER_LOOKBACK_DAYS must be non-negative")

        if self.messaging.timeout <= 0:
            errors.append("MESSAGING_TIMEOUT must be positive")

        for name, url in self.messaging.queue_urls().items():
            if not url.startswith(("http://", "https://")):
                errors.append(f"{name} URL must be http(s): {url}")

        return errors

    def setup_logging(self) -> None:
        """Configure logging based on configuration."""
        level = getattr(logging, self.log_level, logging.INFO)

        # Configure format based on environment
        if self.environment == Environment.DEVELOPMENT:
            format_str = f"%(asctime)s - [{APP_NAME}] %(name)s - %(levelname)s - %(message)s"
        else:
            format_str = f"%(asctime)s - [{APP_NAME}] %(levelname)s - %(message)s"

        logging.basicConfig(level=level, format=format_str, datefmt="%Y-%m-%d %H:%M:%S")

        # Reduce noise from the HTTP transport outside development
        if self.environment != Environment.DEVELOPMENT:
            logging.getLogger("httpx").setLevel(logging.WARNING)
            logging.getLogger("httpcore").setLevel(logging.WARNING)

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a flat, printable dictionary."""
        result: dict[str, Any] = {}

        for field_name, field_value in self.__dict__.items():
            if hasattr(field_value, "__dict__") and not isinstance(field_value, Enum):
                # Nested dataclass
                result[field_name] = {
                    nested_name: nested_value.value if isinstance(nested_value, Enum) else nested_value
                    for nested_name, nested_value in field_value.__dict__.items()
                }
            elif isinstance(field_value, Enum):
                result[field_name] = field_value.value
            else:
                result[field_name] = field_value

        return result


# Global configuration instance
_config: Config | None = None


def get_config() -> Config:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = Config.from_environment()

        # Validate configuration
        errors = _config.validate()
        if errors:
            raise ValueError(f"Configuration validation failed: {'; '.join(errors)}")

        # Setup logging
        _config.setup_logging()

    return _config


def reload_config() -> Config:
    """Reload configuration from environment (useful for testing)."""
    global _config
    _config = None
    return get_config()

