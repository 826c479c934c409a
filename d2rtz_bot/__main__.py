import asyncio, logging
from d2rtz_bot.classes.app_config import AppConfig
from d2rtz_bot.classes.log_format import configure_logging
from d2rtz_bot.bot import DiscordBot


def main():
    config = AppConfig()
    configure_logging(config.get_log_level())
    token = config.get_discord_api_key()
    if not token:
        raise ValueError(f"No discord.api_key found in {config.config_path}")
    discord_bot = DiscordBot(token=token, config=config)
    try:
        asyncio.run(discord_bot.run())
    except KeyboardInterrupt:
        logging.info("Shutting down.")


if __name__ == "__main__":
    main()
