"""Derives user stories, entity analysis and database design from requirements."""

import logging
from enum import Enum

from .llm_client import LLMClient, LLMClientError

logger = logging.getLogger(__name__)


class ArtifactKind(str, Enum):
    """Artifacts that can be generated for a project."""

    USER_STORIES = "user_stories"
    ENTITIES = "entities"
    DB_DESIGN = "db_design"


class GenerationError(Exception):
    """Generation failed. The message is safe to show to users."""

    def __init__(self, message: str = "Generation failed, please try again"):
        super().__init__(message)


class GenerationNotConfiguredError(GenerationError):
    """No model API key is configured."""

    def __init__(self):
        super().__init__("Generation service is not configured")


SYSTEM_PROMPTS: dict[ArtifactKind, str] = {
    ArtifactKind.USER_STORIES: (
        "You are an experienced requirements analyst and agile practitioner. "
        "Analyse the requirements document and write high-quality user stories in the form: "
        "As a [role], I want [capability], so that [benefit]. "
        "Cover every feature in the document and group the stories by area."
    ),
    ArtifactKind.ENTITIES: (
        "You are an experienced requirements analyst and data modeller. "
        "Identify the key business entities in the requirements document. "
        "For each entity list its attributes, data types, constraints and relationships "
        "to other entities. Return the result as structured JSON."
    ),
    ArtifactKind.DB_DESIGN: (
        "You are an experienced database designer. "
        "Produce a database design for the requirements document: tables, columns, "
        "primary and foreign keys, and index recommendations. Keep it normalised while "
        "considering performance, and include a SQL DDL script."
    ),
}

USER_PROMPTS: dict[ArtifactKind, str] = {
    ArtifactKind.USER_STORIES: "Write a complete set of user stories for this requirements document:\n\n{text}",
    ArtifactKind.ENTITIES: "Identify and describe all key business entities in this requirements document:\n\n{text}",
    ArtifactKind.DB_DESIGN: "Design an optimised database schema for this requirements document:\n\n{text}",
}


class GenerationService:
    """Runs one model call per artifact. Stateless apart from the client."""

    def __init__(self, client: LLMClient, temperature: float = 0.7) -> None:
        self._client = client
        self._temperature = temperature

    def generate(self, kind: ArtifactKind, requirement_text: str) -> str:
        """Generate an artifact from the requirements text.

        Raises:
            GenerationNotConfiguredError: No API key configured
            GenerationError: The model call failed
        """
        if not self._client.is_configured:
            logger.warning("Model API key not configured, skipping generation")
            raise GenerationNotConfiguredError()

        try:
            content = self._client.chat(
                SYSTEM_PROMPTS[kind],
                USER_PROMPTS[kind].format(text=requirement_text),
                temperature=self._temperature,
            )
        except LLMClientError as e:
            logger.error(f"Generation of {kind.value} failed: {e}")
            raise GenerationError() from e

        logger.info(f"Generated {kind.value} ({len(content)} chars)")
        return content

    def close(self) -> None:
        self._client.close()
