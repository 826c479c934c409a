import logging

import requests

logger = logging.getLogger(__name__)


def build_group_payload(text: str, group_id):
    return {
        "group_id": group_id,
        "message": [
            {
                "type": "text",
                "data": {
                    "text": text
                }
            }
        ]
    }


def send_group_message(text: str, config) -> str:
    headers = {
        "Content-Type": "application/json",
        "Authorization": f"Bearer {config.get_auth_token()}",
    }
    payload = build_group_payload(text, config.get_group_id())
    try:
        response = requests.post(config.get_send_message_url(), headers=headers, json=payload)
        response.raise_for_status()
    except requests.RequestException as e:
        logger.error(f"Error sending group message: {e}")
        raise
    logger.info(f"Group message sent successfully: {response.text}")
    return response.text
