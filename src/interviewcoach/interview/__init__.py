"""
Interview Session Engine.

This module provides the mock interview capabilities:
- Duplicate-free question selection
- Heuristic and AI answer evaluation
- Report aggregation with local fallback
- Interview session management
"""

from .question_generator import QuestionGenerator
from .answer_evaluator import AnswerEvaluation, HeuristicAnswerEvaluator
from .ai_evaluator import AIEvaluationOutcome, AIEvaluator
from .report_generator import ReportGenerator
from .session_store import SessionStore, InMemorySessionStore, JsonSessionStore
from .session_manager import InterviewSessionManager, StartResult, SubmitResult

__all__ = [
    'QuestionGenerator',
    'AnswerEvaluation',
    'HeuristicAnswerEvaluator',
    'AIEvaluationOutcome',
    'AIEvaluator',
    'ReportGenerator',
    'SessionStore',
    'InMemorySessionStore',
    'JsonSessionStore',
    'InterviewSessionManager',
    'StartResult',
    'SubmitResult'
]
