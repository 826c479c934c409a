import logging
from openai import OpenAI

logger = logging.getLogger(__name__)


def build_client(api_key: str, base_url: str):
    # Every call is single-shot; failures surface straight to the user.
    return OpenAI(api_key=api_key, base_url=base_url, max_retries=0)


def send_request(api_key: str, base_url: str, model: str, message_log: list, **kwargs) -> str:
    client = build_client(api_key, base_url)
    response = client.chat.completions.create(
        model=model,
        messages=message_log,
        **kwargs,
    )
    logger.debug(f"Chat completion response from {base_url}: {response}")
    content = response.choices[0].message.content
    if not content:
        raise ValueError("empty completion returned")
    return content.strip()
