import json, logging, os
from pathlib import Path

DEFAULT_CONFIG = {
    "log_level": "INFO",
    "cmd_prefix": "!",
    "discord": {
        "api_key": None,
    },
    "terror_zone": {
        "api_url": "https://api.d2-trade.com/api/query/tz_online",
        "cache_path": None,
    },
    "group_message": {
        "send_message_url": "http://example.message.com/send_group_msg",
        "group_id": "1026709881",
        "auth_token": "abc",
    },
    "announce": {
        "enabled": False,
        "interval_minutes": 30,
    },
    "appraisal": {
        "ocr_api_url": "https://dashscope.aliyuncs.com/compatible-mode/v1",
        "ocr_api_key": None,
        "ocr_model": "qwen-vl-ocr",
        "ai_api_url": "https://dashscope.aliyuncs.com/compatible-mode/v1",
        "ai_api_key": None,
        "ai_model": "qwen-plus",
        "ai_max_tokens": 200,
        "mock_mode": False,
        "test_mode": False,
        "prompt_timeout": 30,
    },
}


class AppConfig:
    def __init__(self, config_path: str = None):
        parent = os.path.dirname(Path(__file__).resolve().parent)
        self.project_root = parent
        config_dir = os.path.join(parent, "config")
        self.config_path = config_path or os.path.join(config_dir, "config.json")
        self.example_config_path = os.path.join(config_dir, "example.json")
        self.reload_config()

    @staticmethod
    def merge_dicts(dict1, dict2):
        result = dict1.copy()
        for key, value in dict2.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = AppConfig.merge_dicts(result[key], value)
            else:
                result[key] = value
        return result

    def reload_config(self):
        if not os.path.exists(self.config_path):
            if os.path.exists(self.example_config_path):
                with open(self.example_config_path, "r", encoding="utf-8") as example_file:
                    example_config = json.load(example_file)
            else:
                example_config = {}
            os.makedirs(os.path.dirname(os.path.abspath(self.config_path)), exist_ok=True)
            with open(self.config_path, "w", encoding="utf-8") as config_file:
                json.dump(example_config, config_file, indent=4, ensure_ascii=False)
        with open(self.config_path, "r", encoding="utf-8") as config_file:
            self.config = json.load(config_file)
        self.config = self.merge_dicts(DEFAULT_CONFIG, self.config)

    def get_log_level(self):
        level = self.config.get("log_level", "INFO")
        result = getattr(logging, str(level).upper(), logging.ERROR)
        return result

    def get_command_prefix(self):
        return self.config.get("cmd_prefix")

    def get_discord_api_key(self):
        return self.config.get("discord", {}).get("api_key", None)

    def get_tz_api_url(self):
        return self.config.get("terror_zone", {}).get("api_url") or DEFAULT_CONFIG["terror_zone"]["api_url"]

    def get_tz_cache_path(self):
        cache_path = self.config.get("terror_zone", {}).get("cache_path")
        if not cache_path:
            return os.path.join(self.project_root, "cache", "tz_online.json")
        if not os.path.isabs(cache_path):
            return os.path.join(self.project_root, cache_path)
        return cache_path

    def get_send_message_url(self):
        return self.config.get("group_message", {}).get("send_message_url")

    def get_group_id(self):
        return self.config.get("group_message", {}).get("group_id")

    def get_auth_token(self):
        return self.config.get("group_message", {}).get("auth_token")

    def get_announce_enabled(self):
        return bool(self.config.get("announce", {}).get("enabled", False))

    def get_announce_interval(self):
        return float(self.config.get("announce", {}).get("interval_minutes", 30))

    def get_appraisal_setting(self, setting_key, default_value=None):
        return self.config.get("appraisal", {}).get(setting_key, default_value)

    def get_ocr_api_url(self):
        return self.get_appraisal_setting("ocr_api_url")

    def get_ocr_api_key(self):
        # One DashScope key usually covers both endpoints.
        return self.get_appraisal_setting("ocr_api_key") or self.get_ai_api_key()

    def get_ocr_model(self):
        return self.get_appraisal_setting("ocr_model")

    def get_ai_api_url(self):
        return self.get_appraisal_setting("ai_api_url")

    def get_ai_api_key(self):
        return self.get_appraisal_setting("ai_api_key")

    def get_ai_model(self):
        return self.get_appraisal_setting("ai_model")

    def get_ai_max_tokens(self):
        return int(self.get_appraisal_setting("ai_max_tokens", 200))

    def get_mock_mode(self):
        return bool(self.get_appraisal_setting("mock_mode", False))

    def get_test_mode(self):
        return bool(self.get_appraisal_setting("test_mode", False))

    def get_prompt_timeout(self):
        return float(self.get_appraisal_setting("prompt_timeout", 30))
