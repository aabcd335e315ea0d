"""
LLM service modules for Groq Cloud integration.
"""
from .groq_service import GroqJudgeClient, initialize_llm, is_quota_error

__all__ = ['GroqJudgeClient', 'initialize_llm', 'is_quota_error']
