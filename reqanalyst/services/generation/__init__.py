"""Language model generation of project artifacts.

Usage:
    from reqanalyst.services.generation import ArtifactKind, GenerationService, LLMClient

    service = GenerationService(LLMClient.from_settings())
    stories = service.generate(ArtifactKind.USER_STORIES, requirement_text)
"""

from .generation_service import (
    ArtifactKind,
    GenerationError,
    GenerationNotConfiguredError,
    GenerationService,
)
from .llm_client import LLMClient, LLMClientError

__all__ = [
    "ArtifactKind",
    "GenerationError",
    "GenerationNotConfiguredError",
    "GenerationService",
    "LLMClient",
    "LLMClientError",
]
