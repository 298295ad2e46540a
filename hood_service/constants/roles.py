# hood_service/constants/roles.py
"""
Association roles checked by the role oracle (crud_relations).
"""

from enum import Enum


class Role(str, Enum):
    ADMIN = "ADMIN"
    TREASURER = "TREASURER"
    MEMBER = "MEMBER"
