# config/settings.py
import os
from dotenv import load_dotenv

BASE_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
load_dotenv(os.path.join(BASE_DIR, ".env"))  # 自动加载环境变量


def _as_bool(val, default=False):
    if val is None:
        return default
    return str(val).lower() in ("1", "true", "yes", "on")


class BaseConfig:
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_DATABASE_URI = os.getenv(
        "DATABASE_URI", "sqlite:///" + os.path.join(BASE_DIR, "test_case_builder.db")
    )
    REDIS_URL = os.getenv("REDIS_URL", "redis://127.0.0.1:6379/0")
    APP_NAME = os.getenv("APP_NAME", "test-case-builder")

    # ========= 变更历史 & 持久化 =========
    # redis / database / memory
    STORE_BACKEND = os.getenv("STORE_BACKEND", "redis")
    # redis key 前缀，多个实例共用一个库时区分
    STORE_KEY_PREFIX = os.getenv("STORE_KEY_PREFIX", "tcb:")
    # 历史记录最大条数，超出后淘汰最旧的
    HISTORY_MAX_SIZE = int(os.getenv("HISTORY_MAX_SIZE", 100))

    # 日志相关
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    LOG_DIR = os.getenv("LOG_DIR", "./logs")
    LOG_JSON = _as_bool(os.getenv("LOG_JSON", "1"), True)  # 是否 JSON 格式
    LOG_TO_FILE = _as_bool(os.getenv("LOG_TO_FILE", "1"), True)
    LOG_MAX_BYTES = int(os.getenv("LOG_MAX_BYTES", 5 * 1024 * 1024))
    LOG_BACKUP_COUNT = int(os.getenv("LOG_BACKUP_COUNT", 5))


class DevelopmentConfig(BaseConfig):
    DEBUG = True
    SQLALCHEMY_DATABASE_URI = os.getenv("DEV_DATABASE_URI", BaseConfig.SQLALCHEMY_DATABASE_URI)
    STORE_BACKEND = os.getenv("STORE_BACKEND", "database")
    LOG_JSON = _as_bool(os.getenv("LOG_JSON", "0"), False)


class ProductionConfig(BaseConfig):
    DEBUG = False


class TestingConfig(BaseConfig):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = os.getenv("TEST_DATABASE_URI", "sqlite:///:memory:")
    STORE_BACKEND = "memory"
    HISTORY_MAX_SIZE = 100
    LOG_TO_FILE = False
    LOG_JSON = False


config_map = {
    "development": DevelopmentConfig,
    "production": ProductionConfig,
    "testing": TestingConfig,
}


def get_config(config_name):
    return config_map.get(config_name, DevelopmentConfig)
