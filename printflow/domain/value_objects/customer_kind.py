"""CustomerKind 枚举 - 客户类型

- RETAIL: 零售客户，需要收取定金
- COMPANY: 企业客户，走账期（不收定金）
"""

from enum import Enum


class CustomerKind(str, Enum):
    RETAIL = "retail"
    COMPANY = "company"
