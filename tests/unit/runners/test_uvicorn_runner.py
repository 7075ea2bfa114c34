"""Unit tests for the Uvicorn runner implementation."""

from pytest_mock import MockerFixture

from models.config import ServiceConfiguration
from runners.uvicorn import start_uvicorn


def test_start_uvicorn(mocker: MockerFixture) -> None:
    """Test the function to start Uvicorn server using de-facto default configuration."""
    configuration = ServiceConfiguration(host="localhost", port=8080, workers=1)

    # don't start real Uvicorn server
    mocked_run = mocker.patch("uvicorn.run")
    start_uvicorn(configuration)
    mocked_run.assert_called_once_with(
        "app.main:app",
        host="localhost",
        port=8080,
        workers=1,
        log_level=20,
        use_colors=True,
        access_log=True,
    )


def test_start_uvicorn_verbose(mocker: MockerFixture) -> None:
    """Test the function to start Uvicorn server using custom configuration."""
    configuration = ServiceConfiguration(
        host="x.y.com", port=1234, workers=10, color_log=False, access_log=False
    )

    # don't start real Uvicorn server
    mocked_run = mocker.patch("uvicorn.run")
    start_uvicorn(configuration, verbose=True)
    mocked_run.assert_called_once_with(
        "app.main:app",
        host="x.y.com",
        port=1234,
        workers=10,
        log_level=10,
        use_colors=False,
        access_log=False,
    )
