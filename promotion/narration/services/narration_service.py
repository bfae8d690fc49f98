import logging
from abc import ABC, abstractmethod
from typing import Optional
import httpx
from promotion.core.config import settings
from promotion.core.exceptions import NarrationError
from promotion.narration.schemas.narration_schema import SegmentNarrationContext
from promotion.narration.services.prompt_generator import PromptGenerator

logger = logging.getLogger(__name__)

COMMENTARY_SYSTEM_MESSAGE = (
    "You are a team of professional wrestling commentators and a match narrator. Your task is to "
    "provide a transcript of the match, alternating between vivid descriptions of the action and "
    "character-driven commentary from the commentators. Every line of output MUST follow the "
    "format: '[SPEAKER:Name]: Text'."
)
SUMMARY_SYSTEM_MESSAGE = (
    "You are a wrestling expert. Your task is to provide a concise summary of a wrestling segment narration."
)


class NarrationService(ABC):
    """Common prompt handling; subclasses only know how to turn a prompt into text."""

    provider_name = "base"
    model: Optional[str] = None

    def __init__(self, prompt_generator: Optional[PromptGenerator] = None, simplified: bool = False):
        self.prompt_generator = prompt_generator or PromptGenerator()
        self.simplified = simplified

    def is_available(self) -> bool:
        return True

    @abstractmethod
    def generate_text(self, prompt: str) -> str:
        """Send one prompt to the provider and return its text."""

    def build_prompt(self, context: SegmentNarrationContext, simplified: Optional[bool] = None) -> str:
        use_simplified = self.simplified if simplified is None else simplified
        if use_simplified:
            return self.prompt_generator.generate_simplified_prompt(context)
        return self.prompt_generator.generate_prompt(context)

    def narrate(self, context: SegmentNarrationContext, simplified: Optional[bool] = None) -> str:
        prompt = self.build_prompt(context, simplified)
        logger.info(f"Requesting narration from {self.provider_name} ({len(prompt)} character prompt)")
        return self.generate_text(prompt)

    def summarize(self, narration: str) -> str:
        return self.generate_text(self.prompt_generator.generate_summary_prompt(narration))


class OpenAICompatibleNarrationService(NarrationService):
    """Chat completions client for OpenAI or any local server speaking the same API."""

    provider_name = "openai-compatible"

    def __init__(self, base_url: str, api_key: Optional[str] = None, model: str = "gpt-4o-mini",
                 timeout: float = 120.0, transport: Optional[httpx.BaseTransport] = None, **kwargs):
        super().__init__(**kwargs)
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.model = model
        self.timeout = timeout
        self.transport = transport

    def is_available(self) -> bool:
        return bool(self.base_url)

    def _headers(self) -> dict:
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    def generate_text(self, prompt: str) -> str:
        system_message = SUMMARY_SYSTEM_MESSAGE if prompt.startswith("Summarize") else COMMENTARY_SYSTEM_MESSAGE
        payload = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": system_message},
                {"role": "user", "content": prompt},
            ],
            "temperature": 0.8,
        }
        try:
            with httpx.Client(timeout=self.timeout, transport=self.transport) as client:
                response = client.post(f"{self.base_url}/chat/completions", json=payload, headers=self._headers())
        except httpx.HTTPError as e:
            logger.error(f"Narration request to {self.base_url} failed: {e}")
            raise NarrationError(f"Narration endpoint unreachable: {e}") from e

        if response.status_code != 200:
            logger.error(f"Narration endpoint returned {response.status_code}: {response.text}")
            raise NarrationError(f"Narration endpoint returned {response.status_code}")

        try:
            content = response.json()["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise NarrationError("Narration endpoint returned an unexpected payload") from e
        if not content or not content.strip():
            raise NarrationError("Narration endpoint returned an empty narration")
        return content.strip()


class MockNarrationService(NarrationService):
    """Offline narrator used when no endpoint is configured."""

    provider_name = "mock"

    def narrate(self, context: SegmentNarrationContext, simplified: Optional[bool] = None) -> str:
        speakers = [npc.name for npc in context.commentators] or ["Narrator"]
        names = [w.name for w in context.wrestlers]
        lines = [
            f"Welcome to {context.show_name or 'the show'}! This is a {context.segment_type.segment_type} "
            f"featuring {', '.join(names)}.",
        ]
        if context.titles:
            lines.append(f"And it's for the {', '.join(t.name for t in context.titles)}!")
        if context.referee:
            lines.append(f"{context.referee.name} is the official in charge tonight.")
        for name in names:
            lines.append(f"{name} is fighting with everything they've got!")
        lines.append(f"And there it is! {context.determined_outcome}")
        return "\n".join(f"[SPEAKER:{speakers[i % len(speakers)]}]: {line}" for i, line in enumerate(lines))

    def summarize(self, narration: str) -> str:
        return "This is a mock summary."

    def generate_text(self, prompt: str) -> str:
        if prompt.startswith("Summarize"):
            return "This is a mock summary."
        return "[SPEAKER:Narrator]: The crowd is on its feet as the bell rings!"


def get_narration_service(transport: Optional[httpx.BaseTransport] = None) -> NarrationService:
    """Pick the narrator from settings: a real endpoint when one is configured, otherwise the mock."""
    if settings.LLM_BASE_URL:
        return OpenAICompatibleNarrationService(
            base_url=settings.LLM_BASE_URL,
            api_key=settings.LLM_API_KEY,
            model=settings.LLM_MODEL,
            timeout=settings.LLM_TIMEOUT_SECONDS,
            transport=transport,
            simplified=settings.NARRATION_SIMPLIFIED_PROMPT,
        )
    return MockNarrationService(simplified=settings.NARRATION_SIMPLIFIED_PROMPT)
