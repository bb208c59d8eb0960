"""Runtime configuration read from the environment (and an optional .env)."""
import os

from dotenv import load_dotenv

load_dotenv()

DATA_DIR = os.getenv("GPA_DATA_DIR", "./data")

CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("GPA_CORS_ORIGINS", "http://localhost:3000").split(",")
    if origin.strip()
]

# Insight text is optional; without a key the insight client stays silent.
OPENAI_API_KEY = os.getenv("OPENAI_API_KEY", "")
OPENAI_BASE_URL = os.getenv("OPENAI_BASE_URL", "https://api.openai.com/v1")
OPENAI_MODEL = os.getenv("OPENAI_MODEL", "gpt-4o")
INSIGHTS_TIMEOUT = float(os.getenv("INSIGHTS_TIMEOUT", "30"))
