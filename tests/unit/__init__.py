"""Unit tests."""

from configuration import configuration  # noqa: F401

config_dict = {
    "name": "test",
    "service": {
        "host": "localhost",
        "port": 8080,
        "workers": 1,
        "color_log": True,
        "access_log": True,
    },
    "cache": {
        "type": "memory",
        "memory": {"max_entries": 100},
    },
    "ollama": {
        "url": "http://test.com:11434",
        "model": "test-model",
    },
}

# NOTE: configuration is initialized before importing endpoints, the app
# module reads CORS settings during import time
configuration.init_from_dict(config_dict)
