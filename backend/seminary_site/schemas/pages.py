"""Page Payloads — response shapes for the public page endpoints.

Invariants:
    - Every section carries error (display message or None) and fallback (bool)
    - fallback=True means items are the built-in defaults, not backend rows
    - A section never fails the whole page: errors are scoped to the section
"""

from typing import Generic, TypeVar

from pydantic import BaseModel, Field

from seminary_site.schemas.content import (
    AboutGalleryImage,
    AboutSection,
    Banner,
    CampusLifeEntry,
    CampusLifeImage,
    Course,
    DonationInfo,
    DownloadItem,
    Event,
    GalleryItem,
    SiteLogo,
    Statistic,
    Video,
)
from seminary_site.schemas.people import AlumniProfile, Teacher

ItemT = TypeVar("ItemT")


class Section(BaseModel, Generic[ItemT]):
    items: list[ItemT] = Field(default_factory=list)
    error: str | None = None
    fallback: bool = False


class FeaturedVideo(Video):
    embed_url: str | None = None


class HomePage(BaseModel):
    banners: Section[Banner]
    statistics: Section[Statistic]
    teachers: Section[Teacher]
    gallery: Section[GalleryItem]
    events: Section[Event]
    video: Section[FeaturedVideo]
    logo: SiteLogo | None = None


class AboutPage(BaseModel):
    sections: Section[AboutSection]
    gallery: Section[AboutGalleryImage]
    statistics: Section[Statistic]


class CampusLifePage(BaseModel):
    entries: Section[CampusLifeEntry]
    gallery: Section[CampusLifeImage]
    events: Section[Event]


class ProgramCourses(BaseModel):
    program_type: str
    courses: Section[Course]


class AlumniDirectory(BaseModel):
    alumni: Section[AlumniProfile]
    graduation_years: list[int]
    degrees: list[str]
    total: int


class GivePage(BaseModel):
    donation_info: Section[DonationInfo]
