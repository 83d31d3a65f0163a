"""
Shared fixtures: a fully wired PiDeskApp running in mock mode
"""

import sys
from pathlib import Path

import pytest
import yaml

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from pidesk.core.notifier import MockBackend, Notifier
from pidesk.main import PiDeskApp
from pidesk.web.webserver import PiDeskWebServer

from .fakes import ManualTickerFactory


@pytest.fixture()
def ticker_factory():
    return ManualTickerFactory()


@pytest.fixture()
def mock_backend():
    return MockBackend()


@pytest.fixture()
def notifier(mock_backend):
    return Notifier(backend=mock_backend)


@pytest.fixture()
def config_path(tmp_path):
    """Config for mock hardware, no web thread, frames written to tmp_path"""
    gpio_path = tmp_path / "gpio_mapping.yaml"
    gpio_path.write_text(yaml.safe_dump({
        'buttons': {name: {'pin': pin, 'pull': 'up'} for name, pin in
                    [('next', 5), ('prev', 6), ('select', 13), ('back', 19), ('menu', 26)]}
    }))

    path = tmp_path / "config.yaml"
    path.write_text(yaml.safe_dump({
        'display': {'width': 400, 'height': 240, 'output_path': str(tmp_path / "frame.png")},
        'timer': {'tick_interval': 1.0, 'default_hours': 0, 'default_minutes': 15, 'default_seconds': 0},
        'todo': {'items_per_page': 3},
        'web': {'enabled': False},
        'gpio_config': 'gpio_mapping.yaml',
        'logging': {'level': 'DEBUG', 'console': False},
    }))
    return path


@pytest.fixture()
def app(config_path, ticker_factory, notifier):
    """PiDeskApp after setup(), driven by manual ticks"""
    application = PiDeskApp(str(config_path), ticker_factory=ticker_factory, notifier=notifier)
    application.setup()
    yield application
    application.stop()


@pytest.fixture()
def client(app):
    server = PiDeskWebServer(app)
    server.flask_app.config['TESTING'] = True
    return server.flask_app.test_client()
