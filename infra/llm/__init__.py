from .groq_ai_service import GroqAIService, GroqAPIError, strip_code_fences

__all__ = ["GroqAIService", "GroqAPIError", "strip_code_fences"]
