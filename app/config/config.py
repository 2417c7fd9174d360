import os
from dotenv import load_dotenv

load_dotenv()

BASE_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), '..', '..'))


def _database_uri():
    url = os.getenv('DATABASE_URL')
    if url:
        return url
    user = os.getenv('DB_USER', 'root')
    password = os.getenv('DB_PASSWORD', 'admin123')
    host = os.getenv('DB_HOST', 'localhost')
    port = os.getenv('DB_PORT', '3306')
    name = os.getenv('DB_NAME', 'new_employee_db')
    return f'mysql+pymysql://{user}:{password}@{host}:{port}/{name}'


class Config:
    SQLALCHEMY_DATABASE_URI = _database_uri()
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    PORT = int(os.getenv('PORT', 3422))
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
    SOCKETIO_ASYNC_MODE = os.getenv('SOCKETIO_ASYNC_MODE', 'eventlet')

    UPLOAD_FOLDER = os.getenv('UPLOAD_FOLDER', os.path.join(BASE_DIR, 'Uploads'))
    PUBLIC_FOLDER = os.getenv('PUBLIC_FOLDER', os.path.join(BASE_DIR, 'public'))
    FRONTEND_FOLDER = os.getenv('FRONTEND_FOLDER', os.path.join(BASE_DIR, 'frontend'))
    HR_FOLDER = os.getenv('HR_FOLDER', os.path.join(BASE_DIR, 'hr_page'))

    MAX_UPLOAD_SIZE = 5 * 1024 * 1024  # per attached document
    MAX_CONTENT_LENGTH = 6 * 1024 * 1024  # whole multipart body

    FRONTEND_URL = os.getenv('FRONTEND_URL')
    CORS_ORIGINS = [
        "http://44.223.23.145:3422",
        "http://127.0.0.1:5500",
        "http://44.223.23.145:5500",
        "http://127.0.0.1:5501",
        "http://127.0.0.1:5503",
        "http://44.223.23.145:8043",
        "http://44.223.23.145:8044",
    ]
    CORS_METHODS = ['GET', 'POST', 'PUT', 'DELETE', 'OPTIONS']
    CORS_HEADERS = ['Content-Type', 'Authorization']


class TestingConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SOCKETIO_ASYNC_MODE = 'threading'
    LOG_LEVEL = 'DEBUG'
