import os

# Base directory
BASE_DIR = os.path.dirname(os.path.abspath(__file__))

# Paths
LOG_FILE = os.getenv("LOG_FILE", os.path.join(BASE_DIR, "launch.log"))
ASSESSMENTS_FILE = os.getenv("ASSESSMENTS_FILE", "")  # empty → built-in sample assessment

# Server
DEFAULT_HOST = os.getenv("HOST", "127.0.0.1")
DEFAULT_PORT = int(os.getenv("PORT", "8000"))

# Client sessions
SESSION_COOKIE = "assessment_session"
SESSION_TTL = int(os.getenv("SESSION_TTL", "3600"))            # seconds of inactivity
CLEANUP_INTERVAL = int(os.getenv("CLEANUP_INTERVAL", "300"))   # expired session sweep

# Assessments
TIME_WARNING_SECONDS = int(os.getenv("TIME_WARNING_SECONDS", "600"))  # red countdown under 10 min
DEFAULT_PAGE_SIZE = int(os.getenv("PAGE_SIZE", "10"))
