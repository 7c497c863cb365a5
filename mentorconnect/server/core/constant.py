"""Server-wide constants."""

PROJECT_NAME = "MentorConnect"
API_V1_STR = "/api/v1"
VERSION = "1.0.0"
SCHEMA_VERSION = "v1"
