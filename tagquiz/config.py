from pathlib import Path
from dotenv import load_dotenv  # pip install python-dotenv
import os

# file name comes from ENV_FILE, defaults to .env
env_file = os.getenv("ENV_FILE", ".env")
load_dotenv(Path(__file__).parent.parent / env_file)

bot_token = os.getenv("BOT_TOKEN")
tags = os.getenv("TAGS", "")

# Empty QUIZ_SEED means a fresh order on every start
_seed = os.getenv("QUIZ_SEED", "42").strip()
quiz_seed = int(_seed) if _seed else None

image_service_url = os.getenv("IMAGE_SERVICE_URL", "http://localhost:8000/collage")
image_service_key = os.getenv("IMAGE_SERVICE_KEY") or None

webhook_url = os.getenv("WEBHOOK_URL", "").rstrip("/")  # empty: long polling
webhook_path = os.getenv("WEBHOOK_PATH", "/bothook")
webhook_secret = os.getenv("WEBHOOK_SECRET") or None
web_server_host = os.getenv("WEB_SERVER_HOST", "0.0.0.0")
web_server_port = int(os.getenv("WEB_SERVER_PORT", "8080"))

request_timeout = float(os.getenv("REQUEST_TIMEOUT", "30"))
cursor_scope = os.getenv("CURSOR_SCOPE", "chat").lower()
database_url = os.getenv("DATABASE_URL", "")  # empty: progress lives in memory

log_level = os.getenv("LOG_LEVEL", "INFO").upper()
