import importlib, logging, os
import discord
from discord.ext import commands

COGS_PATH = os.path.join(os.path.dirname(os.path.abspath(__file__)), "cogs")


class DiscordBot:
    def __init__(self, token, config):
        self.token = token
        self.config = config
        intents = discord.Intents.default()
        intents.message_content = True
        self.bot = commands.Bot(command_prefix=config.get_command_prefix(), intents=intents)

    async def on_ready(self):
        logging.info(f"Bot is ready! Logged in as {self.bot.user}")

    async def run(self):
        await self.load_cogs()
        self.bot.event(self.on_ready)
        await self.bot.start(self.token)

    async def load_cogs(self, cogs_path=COGS_PATH):
        """Add every cog found under cogs_path; a module foo.py must define class Foo."""
        logging.debug("Loading cogs! Path: " + cogs_path)
        package_root = os.path.dirname(os.path.dirname(cogs_path))
        for root, _, files in os.walk(cogs_path):
            logging.debug("Found cogs: " + str(files))
            for file in files:
                if not file.endswith(".py") or file.startswith("_"):
                    continue
                relative_path = os.path.relpath(os.path.join(root, file), package_root)
                cog_path = relative_path.replace("/", ".").replace("\\", ".")[:-3]
                try:
                    cog_module = importlib.import_module(cog_path)
                    cog_class = getattr(cog_module, file[:-3].capitalize())
                    await self.bot.add_cog(cog_class(self.bot, self.config))
                    logging.debug(f"Loaded cog: {cog_path}")
                except Exception as e:
                    logging.error(f"Failed to load cog: {cog_path}")
                    logging.error(e)
