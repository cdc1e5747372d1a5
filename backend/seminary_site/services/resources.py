"""Resource Registry — admin-managed tables, their record types, ordering and buckets.

Invariants:
    - Every admin URL slug maps to exactly one backend table
    - write_model is None for read-only resources (submissions come from public forms)
    - file_fields name the columns whose URLs point into the resource's bucket
"""

from dataclasses import dataclass, field

from pydantic import BaseModel

from seminary_site.config import Settings
from seminary_site.schemas.content import (
    AboutGalleryImage, AboutGalleryImageWrite,
    AboutSection, AboutSectionWrite,
    Banner, BannerWrite,
    CampusLifeEntry, CampusLifeEntryWrite,
    CampusLifeImage, CampusLifeImageWrite,
    Course, CourseWrite,
    DonationInfo, DonationInfoWrite,
    DownloadItem, DownloadItemWrite,
    Event, EventWrite,
    GalleryItem, GalleryItemWrite,
    SiteLogo, SiteLogoWrite,
    Statistic, StatisticWrite,
    Video, VideoWrite,
)
from seminary_site.schemas.people import (
    AlumniProfile, AlumniProfileWrite, Teacher, TeacherWrite,
)
from seminary_site.schemas.registration import Registration, StudentApplication


@dataclass(frozen=True)
class ResourceSpec:
    slug: str
    table: str
    model: type[BaseModel]
    write_model: type[BaseModel] | None
    order: tuple[tuple[str, bool], ...] = (("created_at", False),)
    bucket: str | None = None
    file_fields: tuple[str, ...] = field(default_factory=tuple)


def build_resources(settings: Settings) -> dict[str, ResourceSpec]:
    """Registry keyed by URL slug; bucket names come from settings."""
    specs = [
        ResourceSpec("banners", "banners", Banner, BannerWrite,
                     order=(("order_index", True),),
                     bucket=settings.banner_bucket, file_fields=("image_url",)),
        ResourceSpec("courses", "courses", Course, CourseWrite,
                     order=(("title", True),)),
        ResourceSpec("teachers", "teachers", Teacher, TeacherWrite,
                     order=(("name", True),),
                     bucket=settings.teacher_bucket, file_fields=("image_url",)),
        ResourceSpec("gallery", "gallery", GalleryItem, GalleryItemWrite,
                     bucket=settings.gallery_bucket, file_fields=("image_url",)),
        ResourceSpec("about-sections", "about_sections", AboutSection, AboutSectionWrite,
                     order=(("created_at", True),)),
        ResourceSpec("about-gallery", "about_gallery", AboutGalleryImage, AboutGalleryImageWrite,
                     bucket=settings.gallery_bucket, file_fields=("image_url",)),
        ResourceSpec("campus-life", "campus_life", CampusLifeEntry, CampusLifeEntryWrite,
                     bucket=settings.gallery_bucket, file_fields=("image_url",)),
        ResourceSpec("campus-life-gallery", "campus_life_gallery", CampusLifeImage, CampusLifeImageWrite,
                     bucket=settings.gallery_bucket, file_fields=("image_url",)),
        ResourceSpec("events", "events", Event, EventWrite,
                     bucket=settings.gallery_bucket, file_fields=("image_url",)),
        ResourceSpec("downloads", "downloads", DownloadItem, DownloadItemWrite,
                     bucket=settings.downloads_bucket, file_fields=("file_url", "image_url")),
        ResourceSpec("donation-info", "donation_info", DonationInfo, DonationInfoWrite,
                     bucket=settings.donation_bucket, file_fields=("qr_code_url",)),
        ResourceSpec("videos", "videos", Video, VideoWrite),
        ResourceSpec("statistics", "statistics", Statistic, StatisticWrite,
                     order=(("created_at", True),)),
        ResourceSpec("site-logo", "site_logo", SiteLogo, SiteLogoWrite,
                     bucket=settings.logo_bucket, file_fields=("logo_url",)),
        ResourceSpec("alumni", "alumni_profiles", AlumniProfile, AlumniProfileWrite,
                     order=(("graduation_year", False),),
                     bucket=settings.alumni_bucket, file_fields=("image_url",)),
        ResourceSpec("registrations", "registrations", Registration, None),
        ResourceSpec("student-applications", "student_registrations", StudentApplication, None,
                     bucket=settings.payment_bucket, file_fields=("payment_screenshot_url",)),
    ]
    return {spec.slug: spec for spec in specs}
