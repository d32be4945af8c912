# carechat/llm.py
import logging
from functools import lru_cache

from openai import OpenAI, OpenAIError

from carechat.config import (
    LLM_API_KEY,
    LLM_BASE_URL,
    LLM_MAX_RETRIES,
    LLM_TIMEOUT,
    MODEL_NAME,
)

logger = logging.getLogger(__name__)

FALLBACK_REPLY = "Sorry, I couldn't generate a response."

DISCLAIMER = "⚠️ Please consult a certified medical professional for personal medical advice."

PROMPT_TEMPLATE = """
You are a helpful and supportive AI healthcare assistant.

The user asked:
"{message}"

Your reply must be in the following format:

**Understanding the issue:**
- Briefly explain what the issue might be about.

**Suggestions to overcome it:**
- Provide 5 to 6 clear, actionable tips or lifestyle improvements that might help the user manage or improve their condition (e.g., rest, hydration, diet, relaxation, exercise, hygiene, etc.).

Always end with this disclaimer:
{disclaimer}
"""

# 固定的解码参数
GENERATION_CONFIG = {
    "temperature": 0.7,
    "top_p": 0.95,
    "max_tokens": 1024,
}
TOP_K = 40


def build_prompt(message: str) -> str:
    # 用 replace 而不是 format，用户消息里的花括号原样保留
    return PROMPT_TEMPLATE.replace("{disclaimer}", DISCLAIMER).replace("{message}", message)


class CompletionGateway:
    """
    对外部文本生成服务的一次调用。
    任何失败都返回 FALLBACK_REPLY，不向上抛出。
    """

    def __init__(self, client: OpenAI, model: str = MODEL_NAME):
        self.client = client
        self.model = model

    def complete(self, message: str) -> str:
        try:
            response = self.client.chat.completions.create(
                model=self.model,
                messages=[{"role": "user", "content": build_prompt(message)}],
                extra_body={"top_k": TOP_K},
                **GENERATION_CONFIG,
            )
        except OpenAIError as e:
            logger.warning("completion request failed: %s", e)
            return FALLBACK_REPLY

        if not response.choices:
            logger.warning("completion returned no choices")
            return FALLBACK_REPLY

        text = response.choices[0].message.content
        if not text or not text.strip():
            logger.warning("completion returned empty text")
            return FALLBACK_REPLY
        return text


def make_client() -> OpenAI:
    return OpenAI(
        api_key=LLM_API_KEY,
        base_url=LLM_BASE_URL,
        timeout=LLM_TIMEOUT,
        max_retries=LLM_MAX_RETRIES,
    )


@lru_cache
def get_gateway() -> CompletionGateway:
    """FastAPI 依赖：进程内只创建一个 client"""
    return CompletionGateway(make_client())
