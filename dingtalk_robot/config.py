from pydantic_settings import BaseSettings

DEFAULT_WEBHOOK_BASE = "https://oapi.dingtalk.com/robot/send?access_token="


class Settings(BaseSettings):
    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}

    APP_ENV: str = "development"

    # DingTalk robot
    DINGTALK_ENABLED: bool = True
    DINGTALK_WEBHOOK_BASE: str = DEFAULT_WEBHOOK_BASE
    DINGTALK_ACCESS_TOKEN: str = ""
    DINGTALK_SEC_TOKEN: str = ""  # Empty means the robot is unsigned
    DINGTALK_DIRECT_URL: str = ""  # Full pre-built URL, overrides token + secret
    # JSON credentials file, e.g. ~/.dingtalk.json. When set, base/token/secret come
    # only from the file; DINGTALK_DIRECT_URL still overrides it.
    DINGTALK_CONFIG_FILE: str = ""
    DINGTALK_TIMEOUT: float = 10.0


settings = Settings()
