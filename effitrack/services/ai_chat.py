import logging
from typing import Dict, List

import requests
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from effitrack.core.config import settings
from effitrack.core.exceptions import AIError
from effitrack.core.prompts import ASSISTANT_SYSTEM

logger = logging.getLogger(__name__)

OPENROUTER_URL = "https://openrouter.ai/api/v1/chat/completions"


@retry(
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=1, min=2, max=10),
    retry=retry_if_exception_type((requests.exceptions.Timeout, requests.exceptions.ConnectionError)),
    reraise=True
)
def _call_openrouter(messages: List[Dict[str, str]], api_key: str) -> str:
    """Internal method to perform the actual API call with retries."""
    response = requests.post(
        OPENROUTER_URL,
        headers={
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
        },
        json={
            "model": settings.ai.model_name,
            "messages": messages,
            "temperature": settings.ai.temperature,
        },
        timeout=settings.ai.timeout_seconds,
    )
    response.raise_for_status()
    return response.json()["choices"][0]["message"]["content"]


def chat_reply(history: List[Dict[str, str]]) -> str:
    """
    Get the assistant's next reply for a conversation.

    Args:
        history: Ordered messages with 'role' (user|assistant) and 'content'

    Returns:
        str: The assistant reply

    Raises:
        AIError: If the API key is missing or the upstream call fails.
    """
    api_key = settings.ai.openrouter_api_key
    if not api_key:
        logger.error("OpenRouter API Key missing.")
        raise AIError("AI service configuration error.")

    messages = [{"role": "system", "content": ASSISTANT_SYSTEM}] + list(history)
    logger.info(f"Calling AI Model: {settings.ai.model_name} ({len(history)} message(s))")
    try:
        return _call_openrouter(messages, api_key)
    except requests.exceptions.Timeout:
        logger.error("AI service timeout.")
        raise AIError("AI service reached timeout limit.")
    except requests.exceptions.HTTPError as e:
        status = e.response.status_code if e.response is not None else "unknown"
        logger.error(f"AI service HTTP error: {e}")
        raise AIError(f"AI service returned error: {status}")
    except (requests.exceptions.RequestException, KeyError, IndexError, ValueError) as e:
        logger.exception("Unexpected error during AI call.")
        raise AIError(f"AI service error: {str(e)}")
