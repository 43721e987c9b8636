"""Global test configuration.

Pins fake AWS credentials and region so boto3 clients can be built in tests
without touching a real account, and clears JUMPHOST_* overrides from the
developer's shell. Logger handlers installed by the CLI are removed after
each test.
"""

import logging
import os

import pytest


@pytest.fixture(autouse=True)
def _isolated_aws_env(monkeypatch):
    for key in list(os.environ):
        if key.startswith("JUMPHOST_") or key in ("AWS_PROFILE", "AWS_DEFAULT_PROFILE"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_SESSION_TOKEN", "testing")
    monkeypatch.setenv("AWS_DEFAULT_REGION", "us-east-1")


@pytest.fixture(autouse=True)
def _reset_logging():
    yield
    for name in ("jumphost", "botocore", "urllib3"):
        logger = logging.getLogger(name)
        logger.handlers.clear()
        logger.setLevel(logging.NOTSET)
