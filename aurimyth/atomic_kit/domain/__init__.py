"""领域层。

业务模型、存储驱动接口、原子 UPSERT 协议。
"""

from . import exceptions, models, upsert

__all__ = [
    "exceptions",
    "models",
    "upsert",
]
