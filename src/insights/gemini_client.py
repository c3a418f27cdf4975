"""Google Gemini client."""

import logging
from typing import Optional

import google.generativeai as genai

from shared import config
from shared.exceptions import AIServiceError

logger = logging.getLogger(__name__)


class GeminiClient:
    """Thin wrapper around ``genai.GenerativeModel`` that raises AIServiceError on any failure."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model_name: Optional[str] = None,
        timeout: Optional[float] = None
    ):
        self.api_key = api_key or config.GEMINI_API_KEY
        self.model_name = model_name or config.GEMINI_MODEL
        self.timeout = timeout or config.AI_REQUEST_TIMEOUT
        self.model = None

        if self.api_key:
            genai.configure(api_key=self.api_key)
            self.model = genai.GenerativeModel(self.model_name)

    @property
    def configured(self) -> bool:
        return self.model is not None

    def generate_text(self, prompt: str) -> str:
        """
        Send a prompt and return the response text.

        Args:
            prompt: Prompt text

        Returns:
            Stripped response text

        Raises:
            AIServiceError: If the client is not configured, the request fails
                or times out, or the response is empty
        """
        if not self.model:
            raise AIServiceError("Gemini API key is not configured")

        try:
            response = self.model.generate_content(
                prompt,
                request_options={"timeout": self.timeout}
            )
            text = (response.text or "").strip()
        except Exception as e:
            logger.warning(f"Gemini request failed: {e}")
            raise AIServiceError(f"Gemini request failed: {str(e)}")

        if not text:
            raise AIServiceError("Gemini returned an empty response")

        return text
