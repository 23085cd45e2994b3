"""Service layer helpers for external integrations."""

from .document_text import DocumentExtractionError, extract_text
from .llm_client import BedrockLlmClient, LlmInvocationError
from .storage import create_storage, get_storage
from .suno_client import RenderingError, SunoClient

__all__ = [
    "BedrockLlmClient",
    "LlmInvocationError",
    "SunoClient",
    "RenderingError",
    "DocumentExtractionError",
    "extract_text",
    "create_storage",
    "get_storage",
]
