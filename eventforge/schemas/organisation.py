"""조직 프로필 Pydantic 요청/응답 스키마 정의.

Organisation profile Pydantic request/response schema definitions.
"""

from pydantic import BaseModel, Field


class OrganisationResponse(BaseModel):
    """조직 프로필 응답 스키마."""

    id: str
    name: str
    bullstat: str
    address: str
    website: str | None = None
    facebook_link: str | None = None
    charity_option: str | None = None
    organisation_purpose: str
    logo_url: str | None = None
    background_url: str | None = None


class OrganisationUpdate(BaseModel):
    """조직 프로필 수정 요청 스키마 (부분 업데이트).

    Partial update; only provided fields are changed.
    The bullstat is fixed at registration and cannot be changed here.
    """

    name: str | None = Field(default=None, min_length=1, max_length=255)
    address: str | None = Field(default=None, min_length=1, max_length=255)
    website: str | None = None
    facebook_link: str | None = None
    charity_option: str | None = None
    organisation_purpose: str | None = Field(default=None, min_length=1)
    logo_url: str | None = None
    background_url: str | None = None
    full_name: str | None = Field(default=None, min_length=1, max_length=255)  # 담당자 이름 (Owner contact name)
    phone_number: str | None = None  # 담당자 연락처 (Owner contact phone)
