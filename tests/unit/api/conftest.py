"""
Fixtures for API route tests.

The app is built with the scripted toolset and a temporary context directory,
so no request leaves the process.
"""

import pytest
from fastapi.testclient import TestClient


@pytest.fixture
def context_registry(tmp_path):
    from opendata_gateway.context.registry import ContextResourceRegistry

    (tmp_path / "members.json").write_text('{"api": "members"}', encoding="utf-8")
    (tmp_path / "bills.json").write_text('{"api": "bills"}', encoding="utf-8")
    return ContextResourceRegistry.load(tmp_path)


@pytest.fixture
def app(settings, toolset, context_registry):
    from opendata_gateway.main import create_app

    return create_app(settings=settings, toolset=toolset, context_registry=context_registry)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client
