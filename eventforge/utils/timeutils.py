"""UTC 시간 유틸리티.

SQLite 등 일부 드라이버는 timezone 정보 없이 datetime을 반환하므로,
비교 전에 UTC로 정규화합니다.
Some drivers return naive datetimes; normalize to UTC before comparing.
"""

from datetime import datetime, timezone


def utc_now() -> datetime:
    """현재 UTC 시각 (Current aware UTC time)."""
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """naive datetime은 UTC로 간주하고, aware datetime은 UTC로 변환합니다."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def is_expired(expires_at: datetime, now: datetime | None = None) -> bool:
    """만료 여부 — expires_at이 현재 시각보다 이전이면 True."""
    return as_utc(expires_at) < (now or utc_now())
