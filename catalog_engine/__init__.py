"""单店商品目录引擎"""

__version__ = "0.1.0"
