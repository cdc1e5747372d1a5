"""Content Records — pydantic types for rows of the public content tables.

Invariants:
    - Every record has a string id; created_at is optional (fallback rows have none)
    - Unknown columns are ignored (backend may add columns without breaking parsing)
    - *Write models are admin inputs: no id, no created_at, field-level limits

Design Decisions:
    - Literal types for enumerated columns (program_type, section_type, category):
      Pydantic rejects rows outside the known set at the boundary
    - One Read/Write pair per table rather than generic dicts: the admin API
      validates input before it ever reaches the backend
"""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

ProgramType = Literal["residential", "hybrid", "online"]
AboutSectionType = Literal["history", "vision", "mission"]
EventCategory = Literal["academic", "spiritual", "cultural", "social"]


class Record(BaseModel):
    """Common shape of every backend row."""
    id: str
    created_at: datetime | None = None


# --- Home page ----------------------------------------------------------------

class Banner(Record):
    title: str
    subtitle: str | None = None
    image_url: str
    button_text: str | None = None
    button_link: str | None = None
    active: bool = True
    order_index: int = 0


class BannerWrite(BaseModel):
    title: str = Field(min_length=1, max_length=200)
    subtitle: str | None = Field(None, max_length=500)
    image_url: str = Field(min_length=1)
    button_text: str | None = Field(None, max_length=100)
    button_link: str | None = None
    active: bool = True
    order_index: int | None = Field(None, ge=0)


class Statistic(Record):
    title: str
    value: int
    icon_name: str | None = None


class StatisticWrite(BaseModel):
    title: str = Field(min_length=1, max_length=100)
    value: int = Field(ge=0)
    icon_name: str | None = None


class GalleryItem(Record):
    title: str = ""
    image_url: str
    description: str | None = None
    category: str | None = None


class GalleryItemWrite(BaseModel):
    title: str = Field("", max_length=200)
    image_url: str = Field(min_length=1)
    description: str | None = Field(None, max_length=2000)
    category: str | None = Field(None, max_length=100)


class Event(Record):
    title: str
    description: str = ""
    image_url: str | None = None
    category: EventCategory


class EventWrite(BaseModel):
    title: str = Field(min_length=1, max_length=200)
    description: str = Field("", max_length=5000)
    image_url: str | None = None
    category: EventCategory


class Video(Record):
    title: str
    subtitle: str | None = None
    video_url: str
    thumbnail_url: str | None = None
    description: str | None = None


class VideoWrite(BaseModel):
    title: str = Field(min_length=1, max_length=200)
    subtitle: str | None = Field(None, max_length=300)
    video_url: str = Field(min_length=1)
    thumbnail_url: str | None = None
    description: str | None = Field(None, max_length=5000)


class SiteLogo(Record):
    logo_url: str
    alt_text: str = ""


class SiteLogoWrite(BaseModel):
    logo_url: str = Field(min_length=1)
    alt_text: str = Field("", max_length=200)


# --- Courses ------------------------------------------------------------------

class Course(Record):
    title: str
    description: str = ""
    duration: str = ""
    schedule: str = ""
    intake: str = ""
    program_type: ProgramType


class CourseWrite(BaseModel):
    title: str = Field(min_length=1, max_length=200)
    description: str = Field("", max_length=10_000)
    duration: str = Field("", max_length=100)
    schedule: str = Field("", max_length=100)
    intake: str = Field("", max_length=100)
    program_type: ProgramType


# --- About / campus life ------------------------------------------------------

class AboutSection(Record):
    section_type: AboutSectionType
    title: str
    content: str = ""  # HTML from the rich-text editor, stored as-is
    updated_at: datetime | None = None


class AboutSectionWrite(BaseModel):
    section_type: AboutSectionType
    title: str = Field(min_length=1, max_length=200)
    content: str = Field("", max_length=50_000)


class AboutGalleryImage(Record):
    title: str = ""
    description: str | None = None
    image_url: str


class AboutGalleryImageWrite(BaseModel):
    title: str = Field("", max_length=200)
    description: str | None = Field(None, max_length=2000)
    image_url: str = Field(min_length=1)


class CampusLifeEntry(Record):
    title: str
    content: str = ""
    image_url: str | None = None


class CampusLifeEntryWrite(BaseModel):
    title: str = Field(min_length=1, max_length=200)
    content: str = Field("", max_length=10_000)
    image_url: str | None = None


class CampusLifeImage(Record):
    image_url: str
    caption: str | None = None


class CampusLifeImageWrite(BaseModel):
    image_url: str = Field(min_length=1)
    caption: str | None = Field(None, max_length=300)


# --- Downloads / giving -------------------------------------------------------

class DownloadItem(Record):
    title: str = ""
    description: str = ""
    file_url: str
    image_url: str | None = None
    category: str = ""


class DownloadItemWrite(BaseModel):
    title: str = Field("", max_length=200)
    description: str = Field("", max_length=2000)
    file_url: str = Field(min_length=1)
    image_url: str | None = None
    category: str = Field("", max_length=100)


class DonationInfo(Record):
    title: str
    qr_code_url: str | None = None
    bank_name: str = ""
    account_number: str = ""
    account_holder: str = ""
    ifsc_code: str = ""
    branch: str = ""


class DonationInfoWrite(BaseModel):
    title: str = Field(min_length=1, max_length=200)
    qr_code_url: str | None = None
    bank_name: str = Field("", max_length=200)
    account_number: str = Field("", max_length=50)
    account_holder: str = Field("", max_length=200)
    ifsc_code: str = Field("", max_length=20)
    branch: str = Field("", max_length=200)
