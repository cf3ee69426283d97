import os
import pytest
import tempfile
from app import create_app, db
from models import User, Client, Product

@pytest.fixture
def app():
    """Create and configure a Flask app for testing"""
    # Create a temporary file to isolate the database for each test
    db_fd, db_path = tempfile.mkstemp()

    # Use SQLite for testing
    app = create_app('config.TestingConfig', SQLALCHEMY_DATABASE_URI=f"sqlite:///{db_path}")

    # Create the database and the database tables
    with app.app_context():
        db.create_all()
        _init_test_data(db)

    yield app

    # Release connections, then close and remove the temporary database
    with app.app_context():
        db.session.remove()
        db.engine.dispose()
    os.close(db_fd)
    os.unlink(db_path)

@pytest.fixture
def client(app):
    """A test client for the app"""
    return app.test_client()

def _login(client, username, password):
    response = client.post('/api/auth/login', json={
        'username': username,
        'password': password
    })
    token = response.get_json().get('access_token')
    return {'Authorization': f'Bearer {token}'}

@pytest.fixture
def auth_headers(client):
    """Get authentication headers with a valid JWT token"""
    return _login(client, 'testuser', 'testpassword')

@pytest.fixture
def other_headers(client):
    """Headers for a second user who must not see testuser's records"""
    return _login(client, 'otheruser', 'otherpassword')

@pytest.fixture
def test_user_id(app):
    """Primary key of the seeded testuser"""
    with app.app_context():
        return User.query.filter_by(username='testuser').first().id

def _init_test_data(db):
    """Initialize test data in the database"""
    # Create test users
    test_user = User(
        username='testuser',
        email='test@example.com',
        password='testpassword',
        role='admin'
    )
    other_user = User(
        username='otheruser',
        email='other@example.com',
        password='otherpassword',
        role='user'
    )
    db.session.add_all([test_user, other_user])

    # Commit to get IDs
    db.session.commit()

    # Create test client
    test_client = Client(
        name='Test Client',
        email='client@example.com',
        phone='555-0100',
        address='123 Test Street',
        user_id=test_user.id
    )
    db.session.add(test_client)

    # One product below its threshold, one comfortably above it
    db.session.add_all([
        Product(name='Printer Paper', price=4.5, stock=2, min_stock=5, user_id=test_user.id),
        Product(name='Toner', price=60, stock=10, min_stock=3, user_id=test_user.id),
        Product(name='Stapler', price=12, stock=0, min_stock=1, user_id=other_user.id),
    ])

    # Commit all changes
    db.session.commit()
