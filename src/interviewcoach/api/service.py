"""
Service layer for constructing and wiring the interview engine components.
"""
import time
from typing import Optional

from ..interview import (
    AIEvaluator,
    HeuristicAnswerEvaluator,
    InterviewSessionManager,
    JsonSessionStore,
    QuestionGenerator,
    ReportGenerator,
    SessionStore
)
from ..interview.ai_evaluator import JudgeClient
from ..llm import GroqJudgeClient
from ..utils.config import GROQ_API_KEY, GROQ_FALLBACK_MODELS, GROQ_PRIMARY_MODEL
from ..utils.logger import setup_logger

logger = setup_logger("api_service")


class InterviewService:
    """
    Process bootstrap for the interview engine.

    Owns the judge client and hands it by reference to the AI evaluator.
    """

    def __init__(self):
        """Initialize the service (components created by initialize())."""
        self.judge_client: Optional[JudgeClient] = None
        self.ai_evaluator: Optional[AIEvaluator] = None
        self.manager: Optional[InterviewSessionManager] = None
        self._initialized = False

    def initialize(
        self,
        store: Optional[SessionStore] = None,
        judge_client: Optional[JudgeClient] = None,
        api_key: Optional[str] = None,
        question_generator: Optional[QuestionGenerator] = None,
        sleep=time.sleep
    ) -> bool:
        """
        Build the engine.

        Args:
            store: Session store. Default: JsonSessionStore in SESSION_STORAGE_DIR
            judge_client: Pre-built judge client. If None, a Groq client is created
                when an API key is available
            api_key: Groq API key. If None, uses GROQ_API_KEY from config
            question_generator: Question selector. Default: built-in bank, unseeded
            sleep: Sleep function for the AI retry backoff

        Returns:
            True if initialization successful, False otherwise
        """
        try:
            logger.info("Initializing Interview Service...")

            if judge_client is None:
                api_key = api_key if api_key is not None else GROQ_API_KEY
                if api_key:
                    judge_client = GroqJudgeClient(api_key=api_key)
                else:
                    logger.warning("⚠️ GROQ_API_KEY not set - reports will use local evaluation")
            self.judge_client = judge_client

            self.ai_evaluator = AIEvaluator(
                client=self.judge_client,
                primary_model=GROQ_PRIMARY_MODEL,
                fallback_models=GROQ_FALLBACK_MODELS,
                sleep=sleep
            )
            report_generator = ReportGenerator(
                ai_evaluator=self.ai_evaluator,
                local_evaluator=HeuristicAnswerEvaluator()
            )
            self.manager = InterviewSessionManager(
                store=store if store is not None else JsonSessionStore(),
                question_generator=question_generator,
                report_generator=report_generator
            )

            self._initialized = True
            logger.info("✅ Interview Service initialized")
            return True
        except Exception as e:
            logger.error(f"❌ Interview Service initialization failed: {e}")
            self._initialized = False
            return False

    def is_ready(self) -> bool:
        return self._initialized and self.manager is not None

    @property
    def ai_enabled(self) -> bool:
        return self.ai_evaluator is not None and self.ai_evaluator.enabled


# Singleton instance
_service = None


def get_service() -> InterviewService:
    """
    Get or create the service instance (singleton).

    Returns:
        InterviewService instance
    """
    global _service
    if _service is None:
        _service = InterviewService()
    return _service
