"""
Shared pytest fixtures for the attribute provider test suites.
"""

import os
import sys

import pytest

sys.path.insert(0, os.path.dirname(__file__))

from shared.test_helpers import TestKeys, test_data_factory


@pytest.fixture(scope="session")
def test_keys() -> TestKeys:
    """RSA key pairs for the provider and the relying party, once per session."""
    return test_data_factory.create_test_keys()


@pytest.fixture
def test_attributes():
    """Attribute policy used by the provider under test."""
    return test_data_factory.create_test_attributes()


@pytest.fixture
def provider_settings(test_keys, test_attributes):
    """Provider settings wired to the test keys."""
    from service_attributes.app.config import ProviderSettings

    return ProviderSettings(
        _env_file=None,
        server_url="https://as.example",
        with_session=False,
        attributes=test_attributes,
        signing_key=test_keys.provider_signing_key,
        encryption_key=test_keys.relying_party_encryption_key,
    )
