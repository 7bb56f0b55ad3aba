"""项目路径工具"""

from functools import lru_cache
from pathlib import Path


@lru_cache
def get_project_root() -> Path:
    """获取项目根目录（包含 pyproject.toml 的目录）"""
    current = Path(__file__).resolve()
    for parent in current.parents:
        if (parent / "pyproject.toml").exists():
            return parent
    # 未安装为项目时回退到包的上一级
    return current.parents[2]
