import logging
from colorama import Fore, Back, Style, init


class ColorizedFormatter(logging.Formatter):
    level_colors = {
        logging.DEBUG: Fore.CYAN,
        logging.INFO: Fore.GREEN,
        logging.WARNING: Fore.YELLOW,
        logging.ERROR: Fore.RED,
        logging.CRITICAL: Fore.RED + Back.WHITE + Style.BRIGHT,
    }

    def format(self, record):
        level_color = self.level_colors.get(record.levelno, '')
        reset_color = Style.RESET_ALL
        message = super().format(record)
        return f"{level_color}{message}{reset_color}"


def configure_logging(level=logging.INFO):
    # Initialize colorama
    init(autoreset=True)

    # Set up logging with the custom formatter
    logger = logging.getLogger()
    logger.setLevel(level)

    handler = logging.StreamHandler()
    handler.setFormatter(ColorizedFormatter("%(asctime)s [%(levelname)s] %(message)s"))

    logger.addHandler(handler)
    logging.getLogger('discord').setLevel(logging.WARNING)
    return logger
