import asyncio, logging
from discord.ext import commands, tasks
from d2rtz_bot.classes.app_config import AppConfig
from d2rtz_bot.classes.terror_zone.rotation import announce_tz, get_tz_info

logger = logging.getLogger(__name__)


# Terror Zone rotation lookups, on demand and on a timer.
class D2rtz(commands.Cog):
    def __init__(self, bot: commands.Bot, config: AppConfig = None):
        self.bot = bot
        self.config = config or AppConfig()

    async def cog_load(self):
        if self.config.get_announce_enabled():
            self.announce.change_interval(minutes=self.config.get_announce_interval())
            self.announce.start()
            logger.info(f"Terror zone announcements every {self.config.get_announce_interval()} minutes")

    async def cog_unload(self):
        self.announce.cancel()

    @commands.command(name="d2rtz", help="Shows the current and next Terror Zone.")
    async def d2rtz(self, ctx):
        await ctx.send(await self.tz_status())

    async def tz_status(self) -> str:
        try:
            return await asyncio.to_thread(get_tz_info, self.config)
        except Exception as e:
            logger.error(f"Error fetching terror zone info: {e}")
            return "获取TZ信息失败: " + str(e)

    @tasks.loop(minutes=30)
    async def announce(self):
        try:
            await asyncio.to_thread(announce_tz, self.config)
        except Exception as e:
            logger.error(f"Terror zone announcement failed: {e}")

    @announce.before_loop
    async def before_announce(self):
        await self.bot.wait_until_ready()
