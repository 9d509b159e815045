"""
Core Utilities Package

Shared configuration, job models and collaborator messaging used by the
delivery package and the CLI.

This package provides:
- Environment-based configuration with an explicit per-job section
- Job type, order status and stage enumerations plus the job result record
- The request/reply MessageClient contract and its HTTP transport
- Typed errors for collaborator failures and malformed replies
"""

from .config import (
    Config,
    Environment,
    JobConfig,
    MessagingConfig,
    get_config,
    reload_config,
)
from .messaging import (
    CollaboratorError,
    HttpMessageClient,
    MessageClient,
    Reply,
    ResponseDecodeError,
    WaybillSyncError,
)
from .models import (
    JobResult,
    JobStage,
    JobType,
    OrderStatus,
    generate_job_id,
)

__all__ = [
    # Configuration
    "Config",
    "Environment",
    "JobConfig",
    "MessagingConfig",
    "get_config",
    "reload_config",
    # Messaging
    "CollaboratorError",
    "HttpMessageClient",
    "MessageClient",
    "Reply",
    "ResponseDecodeError",
    "WaybillSyncError",
    # Job models
    "JobResult",
    "JobStage",
    "JobType",
    "OrderStatus",
    "generate_job_id",
]
