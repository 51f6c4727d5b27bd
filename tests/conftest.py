"""Shared test fixtures and utilities."""

import pytest

from azblob_getter.config import GetterSettings
from azblob_getter.constants import CONFIG_ENV_VAR, ENV_PREFIX
from azblob_getter.getter import AzureBlobGetter
from azblob_getter.storage.memory import MemoryStoreClient
from tests.fixtures.sample_blobs import CONTAINER, SAMPLE_BLOBS


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Keep user config files and AZBLOB_GETTER_* variables out of tests."""
    import os

    for name in list(os.environ):
        if name.startswith(ENV_PREFIX) or name == CONFIG_ENV_VAR:
            monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def store():
    """In-memory store holding the sample blobs."""
    return MemoryStoreClient({CONTAINER: SAMPLE_BLOBS})


@pytest.fixture
def make_getter(store):
    """Factory fixture for getters backed by the in-memory store.

    The getter records every address reference it builds a client for.
    """
    def _make_getter(client=None, **settings):
        refs = []

        def factory(ref, _settings):
            refs.append(ref)
            return client or store

        getter = AzureBlobGetter(client_factory=factory, settings=GetterSettings(**settings))
        getter.refs = refs
        return getter
    return _make_getter


@pytest.fixture
def getter(make_getter):
    return make_getter()
