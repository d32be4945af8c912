# carechat/llm_check.py
"""
直接向配置好的模型服务发送一条 prompt 并打印回复，用来检查 key 和网络。

    python -m carechat.llm_check "Explain how AI works in a few words"
"""
import logging
import sys

from openai import OpenAI, OpenAIError

from carechat.config import MODEL_NAME
from carechat.llm import make_client

DEFAULT_PROMPT = "Explain how AI works in a few words"


def run_check(client: OpenAI, prompt: str = DEFAULT_PROMPT, model: str = MODEL_NAME) -> int:
    try:
        response = client.chat.completions.create(
            model=model,
            messages=[{"role": "user", "content": prompt}],
        )
    except OpenAIError as e:
        print(f"Error calling {model}: {e}", file=sys.stderr)
        return 1

    reply = response.choices[0].message.content if response.choices else None
    if not reply:
        print(f"{model} returned an empty response", file=sys.stderr)
        return 1

    print(f"{model} response:\n{reply}")
    return 0


def main(argv=None) -> int:
    logging.basicConfig(level=logging.INFO)
    argv = sys.argv[1:] if argv is None else argv
    prompt = " ".join(argv) or DEFAULT_PROMPT
    return run_check(make_client(), prompt)


if __name__ == "__main__":
    sys.exit(main())
