#!/usr/bin/env python3
"""Tests for environment-based configuration and job models."""

import logging
from datetime import datetime

import pytest

from waybill_sync.core.config import APP_NAME, Config, Environment, JobConfig, MessagingConfig
from waybill_sync.core.models import JobResult, JobStage, JobType, OrderStatus, generate_job_id

ENV_VARS = [
    "WAYBILL_SYNC_ENV",
    "STORE",
    "VENDOR_ID",
    "ORDER_STATUS",
    "ORDER_LOOKBACK_DAYS",
    "ONCH_SERVICE_URL",
    "COUPANG_SERVICE_URL",
    "MAIL_SERVICE_URL",
    "MESSAGING_TIMEOUT",
    "LOG_LEVEL",
    "DEBUG",
]


@pytest.fixture
def clean_env(monkeypatch):
    """Remove every configuration variable from the environment."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestConfigFromEnvironment:
    """Test configuration loading."""

    def test_defaults(self, clean_env):
        config = Config.from_environment()

        assert config.environment == Environment.DEVELOPMENT
        assert config.job == JobConfig(store_id="")
        assert config.job.order_status == OrderStatus.INSTRUCT
        assert config.messaging == MessagingConfig()
        assert config.log_level == "INFO"
        assert config.validate() == []

    def test_values_from_environment(self, clean_env):
        clean_env.setenv("WAYBILL_SYNC_ENV", "production")
        clean_env.setenv("STORE", "store-1")
        clean_env.setenv("VENDOR_ID", "A00012345")
        clean_env.setenv("ORDER_STATUS", "departure")
        clean_env.setenv("ORDER_LOOKBACK_DAYS", "3")
        clean_env.setenv("COUPANG_SERVICE_URL", "https://coupang.internal")
        clean_env.setenv("MESSAGING_TIMEOUT", "12.5")
        clean_env.setenv("LOG_LEVEL", "debug")

        config = Config.from_environment()

        assert config.environment == Environment.PRODUCTION
        assert config.job == JobConfig(
            store_id="store-1",
            vendor_id="A00012345",
            order_status=OrderStatus.DEPARTURE,
            lookback_days=3,
        )
        assert config.messaging.queue_urls()["coupang-queue"] == "https://coupang.internal"
        assert config.messaging.timeout == 12.5
        assert config.log_level == "DEBUG"
        assert config.validate() == []

    def test_production_requires_store(self, clean_env):
        clean_env.setenv("WAYBILL_SYNC_ENV", "production")

        errors = Config.from_environment().validate()

        assert errors == ["STORE is required in production"]

    def test_validation_collects_every_error(self):
        config = Config(
            environment=Environment.TEST,
            job=JobConfig(store_id="store-1", lookback_days=-1),
            messaging=MessagingConfig(mail_url="amqp://mail", timeout=0),
        )

        errors = config.validate()

        assert len(errors) == 3
        assert any("ORDER_LOOKBACK_DAYS" in e for e in errors)
        assert any("MESSAGING_TIMEOUT" in e for e in errors)
        assert any("mail-queue" in e for e in errors)

    def test_to_dict_flattens_enums(self):
        config = Config(environment=Environment.TEST, job=JobConfig(store_id="store-1"))

        data = config.to_dict()

        assert data["environment"] == "test"
        assert data["job"]["order_status"] == "INSTRUCT"
        assert data["messaging"]["onch_queue"] == "onch-queue"

    def test_log_format_carries_app_name(self, monkeypatch):
        captured = {}
        monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: captured.update(kwargs))

        Config(environment=Environment.PRODUCTION, job=JobConfig(store_id="store-1")).setup_logging()

        assert APP_NAME == "Waybill Sync"
        assert f"[{APP_NAME}]" in captured["format"]


class TestJobModels:
    """Test job identifiers and results."""

    def test_job_id_format(self):
        job_id = generate_job_id(datetime(2024, 8, 15, 9, 30, 5))

        assert job_id.startswith("093005-")
        assert len(job_id) == len("093005-") + 4

    def test_job_ids_differ(self):
        assert len({generate_job_id() for _ in range(20)}) > 1

    def test_job_type_tag(self):
        assert JobType.SHIPPING.tag == "[SHIPPING]"
        assert JobType.ERROR.tag == "[ERROR]"

    def test_uploaded_only_after_notify_stage(self):
        assert JobResult(job_id="j", success=True, stage=JobStage.NOTIFY).uploaded
        assert not JobResult(job_id="j", success=True, stage=JobStage.MATCH).uploaded
        assert not JobResult(job_id="j", success=False, stage=JobStage.NOTIFY).uploaded
