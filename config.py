import os

from dotenv import load_dotenv

load_dotenv(".env", override=False)


class Config:
    MYSQL_HOST = os.getenv('DB_HOST', 'localhost')
    MYSQL_USER = os.getenv('DB_USER', 'root')
    MYSQL_PASSWORD = os.getenv('DB_PASSWORD', 'password')
    MYSQL_DB = os.getenv('DB_NAME', 'gensoft_logistics')
    MYSQL_PORT = int(os.getenv('DB_PORT', 3306))
    MYSQL_CURSORCLASS = 'DictCursor'
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')


PORT = 5000
