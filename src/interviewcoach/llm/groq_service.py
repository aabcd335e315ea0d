"""
Groq Cloud LLM service for interview evaluation.

This module owns the connection to the generative judge. The client is
constructed once by the process bootstrap and passed by reference into the
AI evaluator; it keeps one ChatGroq instance per model so that the
evaluator's model-fallback chain can address any configured model.

Provider errors are translated into the engine's exception types:
- QuotaExceededError for rate-limit / quota exhaustion (HTTP 429)
- ExternalServiceError for every other transport or provider failure
"""
import re
from typing import Dict, Optional

from groq import RateLimitError
from langchain_groq import ChatGroq

from ..errors import ExternalServiceError, QuotaExceededError
from ..utils.config import (
    GROQ_API_KEY,
    GROQ_MAX_TOKENS,
    GROQ_SEED,
    GROQ_TEMPERATURE,
    GROQ_TIMEOUT_SECONDS,
    GROQ_TOP_P
)
from ..utils.logger import setup_logger

logger = setup_logger("groq_service")

QUOTA_ERROR_MARKERS = (
    "rate limit", "rate_limit", "quota", "resource exhausted", "resource_exhausted", "too many requests"
)
# SDK messages read "Error code: 429 - ..."; a bare 429 elsewhere (ids, token counts) is not a status
QUOTA_STATUS_PATTERN = re.compile(r"\b(?:error code|status(?: code)?)\s*[:=]?\s*429\b", re.IGNORECASE)


def is_quota_error(error: BaseException) -> bool:
    """
    Check whether a provider error signals quota or rate-limit exhaustion.
    
    Args:
        error: Exception raised by the provider SDK
        
    Returns:
        True for quota/rate-limit errors, False for anything else
    """
    if isinstance(error, (RateLimitError, QuotaExceededError)):
        return True
    
    status_code = getattr(error, "status_code", None) or getattr(error, "code", None)
    if status_code == 429:
        return True
    
    message = str(error).lower()
    if QUOTA_STATUS_PATTERN.search(message):
        return True
    return any(marker in message for marker in QUOTA_ERROR_MARKERS)


def initialize_llm(
    api_key: str,
    model_name: str,
    temperature: float = None,
    top_p: float = None,
    max_tokens: int = None,
    seed: int = None,
    timeout: float = None
) -> ChatGroq:
    """
    Initialize a Groq Cloud LLM for one model.
    
    Args:
        api_key: Groq API key
        model_name: Model name
        temperature: Temperature setting. If None, uses config default.
        top_p: Top-p setting. If None, uses config default.
        max_tokens: Max tokens. If None, uses config default.
        seed: Random seed. If None, uses config default.
        timeout: Request timeout in seconds. If None, uses config default.
        
    Returns:
        ChatGroq LLM instance
    """
    if not api_key:
        raise ValueError("GROQ_API_KEY not found. Please set it in environment or config.")
    
    if temperature is None:
        temperature = GROQ_TEMPERATURE
    if top_p is None:
        top_p = GROQ_TOP_P
    if max_tokens is None:
        max_tokens = GROQ_MAX_TOKENS
    if seed is None:
        seed = GROQ_SEED
    if timeout is None:
        timeout = GROQ_TIMEOUT_SECONDS
    
    # max_retries=0: the evaluator owns the whole retry budget
    llm = ChatGroq(
        groq_api_key=api_key,
        model_name=model_name,
        temperature=temperature,
        max_tokens=max_tokens,
        timeout=timeout,
        max_retries=0,
        model_kwargs={
            "top_p": top_p,
            "seed": seed
        }
    )
    logger.info(
        f"✅ Groq Cloud LLM initialized: {model_name} "
        f"(temp={temperature}, max_tokens={max_tokens}, timeout={timeout}s)"
    )
    return llm


class GroqJudgeClient:
    """
    Text-completion client for the AI judge.
    
    Accepts a prompt string and a model name, returns the model's raw text.
    """
    
    def __init__(
        self,
        api_key: Optional[str] = None,
        temperature: float = None,
        max_tokens: int = None,
        timeout: float = None
    ):
        """
        Args:
            api_key: Groq API key. If None, uses GROQ_API_KEY from config.
            temperature: Sampling temperature for every model
            max_tokens: Completion token limit for every model
            timeout: Per-request timeout in seconds
        """
        self.api_key = api_key if api_key is not None else GROQ_API_KEY
        if not self.api_key:
            raise ValueError("GROQ_API_KEY not found. Please set it in environment or config.")
        
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.timeout = timeout
        self._llms: Dict[str, ChatGroq] = {}
    
    def _get_llm(self, model_name: str) -> ChatGroq:
        """Get or create the LLM for a model."""
        if model_name not in self._llms:
            self._llms[model_name] = initialize_llm(
                api_key=self.api_key,
                model_name=model_name,
                temperature=self.temperature,
                max_tokens=self.max_tokens,
                timeout=self.timeout
            )
        return self._llms[model_name]
    
    def complete(self, prompt: str, model_name: str) -> str:
        """
        Send a prompt to one model and return its raw text.
        
        Raises:
            QuotaExceededError: The provider reported quota/rate-limit exhaustion
            ExternalServiceError: Any other provider or transport failure
        """
        try:
            response = self._get_llm(model_name).invoke(prompt)
        except Exception as e:
            if is_quota_error(e):
                raise QuotaExceededError(f"{model_name}: {e}") from e
            raise ExternalServiceError(f"{model_name}: {e}") from e
        
        content = getattr(response, "content", response)
        if isinstance(content, list):
            content = "".join(
                part.get("text", "") if isinstance(part, dict) else str(part)
                for part in content
            )
        return content or ""
