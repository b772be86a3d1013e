# llm service using the anthropic messages api for multimodal text generation
import requests
import logging
from typing import List, Dict, Any, Optional

from .config import settings
from .models import GenerationResult, Message, TextBlock, TokenUsage

logger = logging.getLogger(__name__)

class GenerationError(Exception):
    """Post generation failed"""

class ConfigurationError(GenerationError):
    """Required provider configuration is missing"""

class ProviderError(GenerationError):
    """Transport failure or non-success response from the provider"""

class EmptyResponseError(GenerationError):
    """Provider answered without any text content block"""

# service for interacting with the anthropic messages api
class AnthropicLLMService:
    """Claude client over the Anthropic REST API"""

    # store connection settings, the api key is only checked when generating
    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        base_url: Optional[str] = None,
        api_version: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None
    ):
        self.api_key = api_key if api_key is not None else settings.ANTHROPIC_API_KEY
        self.model = model or settings.ANTHROPIC_MODEL
        self.base_url = (base_url or settings.ANTHROPIC_BASE_URL).rstrip("/")
        self.api_version = api_version or settings.ANTHROPIC_VERSION
        self.timeout = timeout if timeout is not None else settings.ANTHROPIC_TIMEOUT
        self.session = session or requests.Session()

    def _headers(self) -> Dict[str, str]:
        return {
            "x-api-key": self.api_key,
            "anthropic-version": self.api_version,
            "content-type": "application/json"
        }

    # generate text from a system prompt and multimodal messages
    def generate(
        self,
        system_prompt: Optional[str],
        messages: List[Message],
        max_tokens: Optional[int] = None,
        temperature: Optional[float] = None
    ) -> GenerationResult:
        """Send one messages request and return its text and token usage"""
        if not self.api_key:
            raise ConfigurationError("ANTHROPIC_API_KEY is not set in environment variables")

        # prepare request payload
        payload: Dict[str, Any] = {
            "model": self.model,
            "messages": [message.model_dump() for message in messages],
            "max_tokens": max_tokens if max_tokens is not None else settings.MAX_TOKENS,
            "temperature": temperature if temperature is not None else settings.TEMPERATURE
        }
        if system_prompt:
            payload["system"] = system_prompt

        try:
            response = self.session.post(
                f"{self.base_url}/v1/messages",
                headers=self._headers(),
                json=payload,
                timeout=self.timeout
            )
        except requests.exceptions.Timeout:
            raise ProviderError("Request to Anthropic API timed out")
        except requests.exceptions.RequestException as e:
            logger.error(f"Error calling Anthropic API: {str(e)}")
            raise ProviderError(f"Cannot reach Anthropic API: {str(e)}")

        if response.status_code != 200:
            raise ProviderError(f"Anthropic API error: {response.status_code} - {response.text}")

        try:
            result = response.json()
        except ValueError:
            raise ProviderError("Anthropic API returned a non-JSON response")

        if not isinstance(result, dict):
            raise EmptyResponseError(f"Anthropic API returned an unexpected response: {type(result).__name__}")

        return GenerationResult(
            text=self._extract_text(result),
            usage=self._extract_usage(result)
        )

    # join all text blocks of the response content
    def _extract_text(self, result: Dict[str, Any]) -> str:
        content = result.get("content")
        if not isinstance(content, list):
            raise EmptyResponseError("Anthropic API response contained no content list")

        text_parts = [
            block["text"]
            for block in content
            if isinstance(block, dict) and block.get("type") == "text" and isinstance(block.get("text"), str)
        ]

        if not text_parts:
            raise EmptyResponseError("Anthropic API response contained no text block")

        return "".join(text_parts)

    # missing or malformed counters count as zero
    def _extract_usage(self, result: Dict[str, Any]) -> TokenUsage:
        usage = result.get("usage")
        if not isinstance(usage, dict):
            usage = {}
        prompt_tokens = _token_count(usage.get("input_tokens"))
        completion_tokens = _token_count(usage.get("output_tokens"))
        return TokenUsage(
            prompt_tokens=prompt_tokens,
            completion_tokens=completion_tokens,
            total_tokens=prompt_tokens + completion_tokens
        )

    # test if the anthropic connection is working
    def test_connection(self) -> bool:
        """Test if the LLM service is working"""
        try:
            message = Message(role="user", content=[TextBlock(text='Hello! Please respond with "OK".')])
            result = self.generate(None, [message], max_tokens=10)
            logger.info(f"✓ LLM test successful. Response: {result.text}")
            return "OK" in result.text
        except GenerationError as e:
            logger.error(f"✗ LLM test failed: {str(e)}")
            return False

def _token_count(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0
    return int(value)

# global instance for singleton pattern
llm_service = None

# get or create the global llm service instance
def get_llm_service() -> AnthropicLLMService:
    """Get or create the global LLM service instance"""
    global llm_service
    if llm_service is None:
        llm_service = AnthropicLLMService()
    return llm_service
