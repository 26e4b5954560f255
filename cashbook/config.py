"""Application configuration."""
import os

from dotenv import load_dotenv

load_dotenv()

DB_HOST = os.getenv("DB_HOST", "localhost")
DB_PORT = os.getenv("DB_PORT", "3306")
DB_USER = os.getenv("DB_USER", "cashbook")
DB_PASSWORD = os.getenv("DB_PASSWORD", "cashbook")
DB_NAME = os.getenv("DB_NAME", "cashbook")

DATABASE_URL = os.getenv(
    "DATABASE_URL",
    f"mysql+pymysql://{DB_USER}:{DB_PASSWORD}@{DB_HOST}:{DB_PORT}/{DB_NAME}?charset=utf8mb4",
)

# 1-based line where CSV data starts; line 1 holds the header.
CSV_IMPORT_FROM_LINE = int(os.getenv("CSV_IMPORT_FROM_LINE", "2"))
CSV_IMPORT_DELIMITER = os.getenv("CSV_IMPORT_DELIMITER", ",")
CSV_IMPORT_ENCODING = os.getenv("CSV_IMPORT_ENCODING", "utf-8")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

MCP_HOST = os.getenv("MCP_HOST", "0.0.0.0")
MCP_PORT = int(os.getenv("MCP_PORT", "8000"))
