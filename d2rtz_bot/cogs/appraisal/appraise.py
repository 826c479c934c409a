import asyncio, logging
import discord
from discord.ext import commands
from d2rtz_bot.classes.app_config import AppConfig
from d2rtz_bot.classes.discord.message_helpers import find_image_url, send_large_messages
from d2rtz_bot.classes.ocr.preprocess import preprocess_ocr_text
from d2rtz_bot.classes.openai.appraisal import analyze_item
from d2rtz_bot.classes.openai.ocr import recognize_image

logger = logging.getLogger(__name__)

MOCK_FLAGS = ("--mock", "-m")
SCREENSHOT_PROMPT = "请在30秒内发送装备截图"
NO_SCREENSHOT = "未检测到有效的装备截图，请重新发送。"


def parse_arguments(argument: str):
    """Split the mock flag off the command text: returns (mock, remaining text)."""
    mock = False
    kept = []
    for line in (argument or "").split("\n"):
        words = []
        for word in line.split(" "):
            if word in MOCK_FLAGS:
                mock = True
            else:
                words.append(word)
        kept.append(" ".join(words))
    return mock, "\n".join(kept).strip()


# Diablo II item appraisal from a tooltip screenshot.
class Appraise(commands.Cog):
    def __init__(self, bot: commands.Bot, config: AppConfig = None):
        self.bot = bot
        self.config = config or AppConfig()

    @commands.command(name="鉴定", help="暗黑破坏神装备鉴定。附带截图，或回复一条带截图的消息。-m/--mock 使用Mock模式。")
    async def appraise(self, ctx, *, argument: str = ""):
        reply = await self.run_appraisal(ctx, argument)
        await send_large_messages(ctx, reply)

    async def run_appraisal(self, ctx, argument: str) -> str:
        mock, text = parse_arguments(argument)

        if self.config.get_test_mode():
            if not text:
                return NO_SCREENSHOT
            logger.info("Test mode enabled, treating command text as OCR output")
            async with ctx.typing():
                return await self.appraise_text(text, mock)

        src = await find_image_url(ctx.message)
        if not src:
            src = await self.wait_for_screenshot(ctx)
        if not src:
            return NO_SCREENSHOT

        logger.info(f"Item screenshot from {ctx.author}: {src}")
        async with ctx.typing():
            ocr_result = await recognize_image(self.config, src, mock=mock)
            if not ocr_result["success"]:
                return f"装备属性识别失败: {ocr_result['error']}"
            return await self.appraise_text(ocr_result["text"], mock)

    async def appraise_text(self, ocr_text: str, mock: bool) -> str:
        cleaned = preprocess_ocr_text(ocr_text)
        logger.debug(f"Preprocessed OCR text:\n{cleaned}")

        analysis_result = await analyze_item(self.config, cleaned, mock=mock)
        if not analysis_result["success"]:
            return f"装备价值分析失败: {analysis_result['error']}"
        return analysis_result["analysis"]

    async def wait_for_screenshot(self, ctx):
        prompt_message = await ctx.send(SCREENSHOT_PROMPT)

        def check(message):
            return message.author == ctx.author and message.channel == ctx.channel

        src = None
        try:
            follow_up = await self.bot.wait_for("message", check=check, timeout=self.config.get_prompt_timeout())
            src = await find_image_url(follow_up)
        except asyncio.TimeoutError:
            logger.debug(f"No screenshot from {ctx.author} within the prompt window")

        try:
            await prompt_message.delete()
        except discord.HTTPException:
            logger.warning(f"Failed to delete prompt message {prompt_message.id} in channel {ctx.channel.id}.")
        return src
