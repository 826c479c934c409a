import asyncio, logging
from openai import APIStatusError

from d2rtz_bot.classes.openai import client

logger = logging.getLogger(__name__)

MOCK_DELAY = 1.5
MOCK_ANALYSIS = (
    "这是一件中级魔法装备，属性较为普通。力量和敏捷的加成对近战职业有一定帮助，"
    "但整体属性并不突出。建议作为过渡装备使用，不建议长期保留。"
)

SYSTEM_ROLE = (
    "你是一个暗黑破坏神2重制版的游戏专家。你将收到一段OCR识别的装备属性文本，"
    "文本可能有少量识别错误。请分析这个装备的价值并给出简要评价，"
    "包括适合的职业或用途、大致的交易价值，以及是否值得保留。回复控制在200字以内。"
)


def build_appraisal_messages(ocr_text: str):
    return [
        {"role": "system", "content": SYSTEM_ROLE},
        {"role": "user", "content": f"装备信息：\n{ocr_text}"},
    ]


async def analyze_item(config, ocr_text: str, mock: bool = False) -> dict:
    logger.info(f"Starting item analysis for:\n{ocr_text}")

    if mock or config.get_mock_mode():
        logger.info("Mock mode enabled, returning canned analysis")
        await asyncio.sleep(MOCK_DELAY)
        return {"success": True, "analysis": MOCK_ANALYSIS}

    try:
        analysis = await asyncio.to_thread(
            client.send_request,
            config.get_ai_api_key(),
            config.get_ai_api_url(),
            config.get_ai_model(),
            build_appraisal_messages(ocr_text),
            max_tokens=config.get_ai_max_tokens(),
        )
    except APIStatusError as e:
        return {"success": False, "error": f"AI分析请求失败: {e.status_code} {e.message}"}
    except Exception as e:
        logger.error(f"AI analysis request raised: {e}")
        return {"success": False, "error": f"AI分析出错: {e}"}

    logger.info(f"AI analysis result: {analysis}")
    return {"success": True, "analysis": analysis}
