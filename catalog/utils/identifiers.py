"""
경로/폼 값으로 들어온 ID 문자열 변환
"""
import re
from typing import Optional

ID_PATTERN = re.compile(r'[0-9]+')

# Integer 컬럼 최대값 (PostgreSQL int4)
MAX_ID = 2 ** 31 - 1


def parse_id(value) -> Optional[int]:
    """숫자 문자열만 정수로 변환, 형식이 다르거나 컬럼 범위를 벗어나면 None"""
    text = str(value)
    if not ID_PATTERN.fullmatch(text):
        return None
    parsed = int(text)
    if parsed > MAX_ID:
        return None
    return parsed
