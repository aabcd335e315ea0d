"""
Configuration settings for the Interview Coach engine.
"""
import os
from pathlib import Path

# Base paths
BASE_DIR = Path(__file__).parent.parent.parent.parent
SESSION_STORAGE_DIR = Path(os.environ.get("SESSION_STORAGE_DIR", BASE_DIR / "interview_sessions"))
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
LOG_FILE = os.environ.get("LOG_FILE")  # Optional, console only when unset

# LLM configuration (the AI judge is disabled when no key is set)
GROQ_API_KEY = os.environ.get("GROQ_API_KEY")
GROQ_PRIMARY_MODEL = os.environ.get("GROQ_PRIMARY_MODEL", "llama-3.1-8b-instant")
GROQ_FALLBACK_MODELS = [
    m.strip()
    for m in os.environ.get(
        "GROQ_FALLBACK_MODELS",
        "meta-llama/llama-4-scout-17b-16e-instruct,llama-3.3-70b-versatile"
    ).split(",")
    if m.strip()
]
GROQ_TEMPERATURE = float(os.environ.get("GROQ_TEMPERATURE", "0.3"))
GROQ_TOP_P = 0.9
GROQ_MAX_TOKENS = int(os.environ.get("GROQ_MAX_TOKENS", "2048"))
GROQ_TIMEOUT_SECONDS = float(os.environ.get("GROQ_TIMEOUT_SECONDS", "30"))
GROQ_SEED = 1

# Fixed backoff before the single delayed retry against the primary model
AI_RETRY_DELAY_SECONDS = float(os.environ.get("AI_RETRY_DELAY_SECONDS", "5"))

# Session parameters
MIXED_CATEGORY = "mixed"
DIFFICULTIES = ["easy", "medium", "hard"]
DEFAULT_DIFFICULTY = "medium"
MIN_QUESTIONS = 3
MAX_QUESTIONS = 10
DEFAULT_QUESTIONS = 5

# Report configuration
MAX_REPORT_ITEMS = 5  # Cap for strengths / improvements
HISTORY_LIMIT = 20

# Local evaluator word lists (matched as whole words / phrases)
POSITIVE_WORDS = [
    "achieved", "accomplished", "improved", "successfully", "effectively",
    "efficiently", "collaborated", "innovative", "solved", "implemented",
    "developed", "created", "designed", "optimized", "delivered",
    "led", "managed", "built", "enhanced", "streamlined",
    "excellent", "great", "best", "strong", "confident",
    "proactive", "initiative", "passionate", "dedicated", "committed"
]

WEAK_WORDS = [
    "maybe", "perhaps", "i think", "i guess", "not sure",
    "kind of", "sort of", "probably", "might", "um",
    "uh", "don't know", "confused", "difficult", "struggle",
    "hard to say", "no idea", "never"
]

FILLER_WORDS = [
    "um", "uh", "like", "you know", "basically",
    "actually", "literally", "right", "so yeah", "i mean"
]

SKIP_SENTINELS = ["(skipped)", "[skipped]", "skipped", "(no answer)", "no answer"]
SKIPPED_TRANSCRIPT = "(skipped)"

# Length thresholds (words) for the communication and confidence axes
COMMUNICATION_LENGTH_THRESHOLDS = [20, 40, 60, 100]
CONFIDENCE_LENGTH_THRESHOLDS = [40, 80]
MIN_ANSWER_CHARS = 5
BRIEF_ANSWER_WORDS = 10

# Weights for the overall local score
LOCAL_SCORE_WEIGHTS = {
    "keyword": 0.35,
    "sentiment": 0.15,
    "communication": 0.25,
    "confidence": 0.25
}

DEFAULT_STRENGTH = "Completed the interview session"
DEFAULT_IMPROVEMENT = "Continue practicing with more interview questions"
