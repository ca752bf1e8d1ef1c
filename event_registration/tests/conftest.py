import pytest
from event_registration.gateway.server import create_app


@pytest.fixture
def app():
    app = create_app({
        "TESTING": True,
        "DB_CONNECT_ON_STARTUP": False,
        "EXPOSE_ERROR_DETAILS": True,
        "API_PREFIX": "/api",
    })
    return app

@pytest.fixture
def client(app):
    return app.test_client()

@pytest.fixture
def mock_db(mocker):
    """
    Mocks the database connection and cursor used by every route module.
    """
    mock_conn = mocker.MagicMock()
    mock_cursor = mocker.MagicMock()

    # Setup the context manager for connection
    mock_conn.__enter__.return_value = mock_conn
    mock_conn.__exit__.return_value = None

    # Setup the context manager for cursor
    mock_cursor.__enter__.return_value = mock_cursor
    mock_cursor.__exit__.return_value = None

    # Connect cursor to connection
    mock_conn.cursor.return_value = mock_cursor

    # Mock get_db to return our mock connection
    mocker.patch("event_registration.auth_service.routes.get_db", return_value=mock_conn)
    mocker.patch("event_registration.events_service.routes.get_db", return_value=mock_conn)
    mocker.patch("event_registration.gateway.server.get_db", return_value=mock_conn)

    return mock_conn, mock_cursor
