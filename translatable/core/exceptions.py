# translatable/core/exceptions.py
"""
本模块定义了 translatable 项目中所有自定义的、语义化的异常类型。

注意：“找不到译文”不是错误，始终以 None 表示；保存失败以 False 返回。
只有配置错误和底层驱动的意外故障才会以异常的形式抛出。
"""


class TranslatableError(Exception):
    """
    所有 translatable 自定义异常的通用基类。
    捕获此异常可以处理所有源自本项目的预期错误。
    """
    pass


class ConfigurationError(TranslatableError):
    """
    表示在加载、解析或验证配置时发生的错误。
    这类错误是致命的，会被立即抛出而不是被吞掉。
    """
    pass


class LocalesNotConfiguredError(ConfigurationError):
    """语言配置 (locales) 为空或缺失。所有的译文解析都依赖于它。"""
    pass


class DatabaseError(TranslatableError):
    """
    表示在存储层操作中发生的意外错误。
    通常是底层数据库驱动异常的包装。
    """
    pass
