import os

from dotenv import load_dotenv

load_dotenv()

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./studyflow.db")

# Ease factor at or above which a question counts as mastered
MASTERY_THRESHOLD = float(os.getenv("MASTERY_THRESHOLD", "2.5"))

CONFLICT_RETRIES = int(os.getenv("CONFLICT_RETRIES", "3"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
