import pytest


@pytest.fixture(autouse=True)
def reset_default_response_builder(monkeypatch):
    """Each test starts with no process-wide default builder."""
    from service_errors.errors import defaults

    monkeypatch.setattr(defaults._slot, "_builder", None)
