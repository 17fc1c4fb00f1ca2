# translatable/config_loader.py
"""
配置装载器

职责：
- 加载 .env / .env.test；
- 构造 TranslatableConfig；
- 严格模式下提前校验语言配置（locales 非空、fallback_locale 在 locales 中）。
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from dotenv import load_dotenv

from translatable.config import TranslatableConfig
from translatable.core.exceptions import ConfigurationError
from translatable.locales import LocaleCatalog

__all__ = ["load_config_from_env"]


# ---------------------------
# 内部工具
# ---------------------------

def _load_env_files(mode: Literal["test", "prod"]) -> None:
    """
    加载 .env / .env.test：
    - test 模式：先加载 .env（override=False），再加载 .env.test（override=True）
    - prod 模式：仅加载 .env（override=False）
    """
    cwd = Path.cwd()
    env_path = cwd / ".env"

    if env_path.exists():
        load_dotenv(env_path, override=False)

    if mode == "test":
        env_test_path = cwd / ".env.test"
        if env_test_path.exists():
            # 测试环境允许 .env.test 覆盖 .env
            load_dotenv(env_test_path, override=True)


def _validate_locales(cfg: TranslatableConfig) -> None:
    """构造一次 LocaleCatalog；locales 为空时这里就会抛出 LocalesNotConfiguredError。"""
    catalog = LocaleCatalog(cfg)
    fallback = cfg.fallback_locale
    if fallback and not catalog.is_valid_locale(fallback):
        raise ConfigurationError(
            f"fallback_locale {fallback!r} 不在已配置的 locales 中：{catalog.locales}"
        )


# ---------------------------
# 公共入口
# ---------------------------

def load_config_from_env(
    mode: Literal["test", "prod"] = "prod",
    strict: bool = True,
) -> TranslatableConfig:
    """
    加载并构造配置对象。

    参数：
      - mode: "test" | "prod"；决定是否加载 .env.test 覆盖项
      - strict: True 时在返回前校验语言配置

    返回：
      - TranslatableConfig 实例（以 TRANSLATABLE_ 前缀 + '__' 嵌套从环境加载）
    """
    _load_env_files(mode)

    cfg = TranslatableConfig()
    if strict:
        _validate_locales(cfg)

    return cfg
