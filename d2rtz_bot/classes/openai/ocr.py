import asyncio, logging
from openai import APIStatusError

from d2rtz_bot.classes.openai import client

logger = logging.getLogger(__name__)

MOCK_DELAY = 1.0
MOCK_OCR_TEXT = """暗黑破坏神装备信息：
力量 +15
敏捷 +10
最大生命值 +20
防御 +50
等级需求 25
稀有度：魔法物品"""

OCR_INSTRUCTION = (
    "请识别图片中暗黑破坏神2装备的全部文字，按原有的行顺序逐行输出纯文本，"
    "不要翻译，不要添加任何解释。"
)


def build_ocr_messages(image_url: str):
    return [
        {
            "role": "user",
            "content": [
                {"type": "image_url", "image_url": {"url": image_url}},
                {"type": "text", "text": OCR_INSTRUCTION},
            ],
        }
    ]


async def recognize_image(config, image_url: str, mock: bool = False) -> dict:
    logger.info(f"Starting OCR for image: {image_url}")

    if mock or config.get_mock_mode():
        logger.info("Mock mode enabled, returning canned OCR text")
        await asyncio.sleep(MOCK_DELAY)
        return {"success": True, "text": MOCK_OCR_TEXT}

    try:
        text = await asyncio.to_thread(
            client.send_request,
            config.get_ocr_api_key(),
            config.get_ocr_api_url(),
            config.get_ocr_model(),
            build_ocr_messages(image_url),
        )
    except APIStatusError as e:
        return {"success": False, "error": f"OCR请求失败: {e.status_code} {e.message}"}
    except Exception as e:
        logger.error(f"OCR request raised: {e}")
        return {"success": False, "error": f"OCR识别出错: {e}"}

    logger.info(f"OCR result: {text}")
    return {"success": True, "text": text}
