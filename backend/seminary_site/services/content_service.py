"""Content Service — assembles the public pages from the hosted backend.

Invariants:
    - Each page section is loaded independently; one failing table never blanks the page
    - A failed section carries the classified display message (describe_error)
    - Banners, video and alumni fall back to built-in content on error or empty result
    - Downloads fall back only on error; courses never fall back when the backend answers
    - Independent sections load concurrently (asyncio.gather)

Design Decisions:
    - Section[...] envelope instead of raising: mirrors the per-widget loading/error
      state of the site, the API client decides how to render a partial page
    - Only SiteError is turned into a section error; programming errors propagate
      to the catch-all handler
"""

import asyncio
import logging
from collections.abc import Callable

from pydantic import BaseModel

from seminary_site.core.error_messages import NO_ROWS_CODE, describe_error
from seminary_site.core.errors import BackendError, ResourceNotFoundError, SiteError
from seminary_site.core.fallback_content import (
    default_alumni,
    default_banners,
    default_courses,
    default_downloads,
    default_statistics,
    default_video,
)
from seminary_site.core.listing_filters import (
    alumni_facets, filter_alumni, group_courses,
)
from seminary_site.core.video_embed import youtube_embed_url
from seminary_site.infrastructure.backend_client import HostedBackendClient, TableQuery
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
from seminary_site.schemas.pages import (
    AboutPage,
    AlumniDirectory,
    CampusLifePage,
    FeaturedVideo,
    GivePage,
    HomePage,
    ProgramCourses,
    Section,
)
from seminary_site.schemas.parsing import parse_row, parse_rows
from seminary_site.schemas.people import AlumniProfile, Teacher

logger = logging.getLogger(__name__)

PROGRAM_TYPES = ("residential", "hybrid", "online")


class ContentService:
    """Read-only page assembly for the public site."""

    def __init__(self, backend: HostedBackendClient):
        self.backend = backend

    # -- Home ------------------------------------------------------------------

    async def home_page(self) -> HomePage:
        banners, statistics, teachers, gallery, events, video, logo = await asyncio.gather(
            self.banners(),
            self._section(Statistic, self._ordered("statistics", "created_at", True),
                          fallback=default_statistics),
            self._section(Teacher, self._ordered("teachers", "name", True)),
            self._section(GalleryItem, self._ordered("gallery", "created_at", False)),
            self._section(Event, self._ordered("events", "created_at", False)),
            self.featured_video(),
            self.site_logo(),
        )
        return HomePage(
            banners=banners, statistics=statistics, teachers=teachers,
            gallery=gallery, events=events, video=video, logo=logo,
        )

    async def banners(self) -> Section[Banner]:
        """Active banners in display order; default banner when none."""
        query = (
            self.backend.table("banners").select()
            .eq("active", True).order("order_index", True)
        )
        return await self._section(
            Banner, query, fallback=default_banners, fallback_when_empty=True,
        )

    async def featured_video(self) -> Section[FeaturedVideo]:
        query = self._ordered("videos", "created_at", False).limit(1)
        section = await self._section(
            Video, query, fallback=lambda: [default_video()], fallback_when_empty=True,
        )
        return Section[FeaturedVideo](
            items=[
                FeaturedVideo(**v.model_dump(), embed_url=youtube_embed_url(v.video_url))
                for v in section.items
            ],
            error=section.error,
            fallback=section.fallback,
        )

    async def site_logo(self) -> SiteLogo | None:
        """Newest logo, or None when there is none or it cannot be loaded."""
        query = self._ordered("site_logo", "created_at", False).limit(1).single()
        try:
            row = await query.execute()
        except BackendError as e:
            if e.backend_code != NO_ROWS_CODE:
                describe_error(e)
            return None
        except SiteError as e:
            describe_error(e)
            return None
        return parse_row(SiteLogo, row, "site_logo") if row else None

    # -- About / campus life ---------------------------------------------------

    async def about_page(self) -> AboutPage:
        sections, gallery, statistics = await asyncio.gather(
            self._section(AboutSection, self._ordered("about_sections", "created_at", True)),
            self._section(AboutGalleryImage, self._ordered("about_gallery", "created_at", False)),
            self._section(Statistic, self._ordered("statistics", "created_at", True),
                          fallback=default_statistics),
        )
        return AboutPage(sections=sections, gallery=gallery, statistics=statistics)

    async def campus_life_page(self) -> CampusLifePage:
        entries, gallery, events = await asyncio.gather(
            self._section(CampusLifeEntry, self._ordered("campus_life", "created_at", False)),
            self._section(CampusLifeImage, self._ordered("campus_life_gallery", "created_at", False)),
            self._section(Event, self._ordered("events", "created_at", False)),
        )
        return CampusLifePage(entries=entries, gallery=gallery, events=events)

    # -- Courses ---------------------------------------------------------------

    async def courses_by_program(self) -> dict[str, Section[Course]]:
        section = await self._section(Course, self._ordered("courses", "title", True))
        if section.error:
            return {
                program: Section[Course](error=section.error)
                for program in PROGRAM_TYPES
            }
        return {
            program: Section[Course](items=courses)
            for program, courses in group_courses(section.items).items()
        }

    async def program_courses(self, program_type: str) -> ProgramCourses:
        """Courses of one program; built-in courses if the backend fails."""
        if program_type not in PROGRAM_TYPES:
            raise ResourceNotFoundError("Program", program_type)
        query = (
            self.backend.table("courses").select()
            .eq("program_type", program_type).order("title", True)
        )
        courses = await self._section(
            Course, query, fallback=lambda: default_courses(program_type),
        )
        return ProgramCourses(program_type=program_type, courses=courses)

    # -- Alumni ----------------------------------------------------------------

    async def alumni_directory(
        self,
        search: str = "",
        graduation_year: int | None = None,
        degree: str | None = None,
    ) -> AlumniDirectory:
        section = await self._section(
            AlumniProfile,
            self._ordered("alumni_profiles", "graduation_year", False),
            fallback=default_alumni,
            fallback_when_empty=True,
        )
        years, degrees = alumni_facets(section.items)
        matches = filter_alumni(section.items, search, graduation_year, degree)
        return AlumniDirectory(
            alumni=Section[AlumniProfile](
                items=matches, error=section.error, fallback=section.fallback,
            ),
            graduation_years=years,
            degrees=degrees,
            total=len(section.items),
        )

    # -- Downloads / giving ----------------------------------------------------

    async def downloads(self) -> Section[DownloadItem]:
        return await self._section(
            DownloadItem, self._ordered("downloads", "created_at", False),
            fallback=default_downloads,
        )

    async def give_page(self) -> GivePage:
        info = await self._section(
            DonationInfo, self._ordered("donation_info", "created_at", False).limit(1),
        )
        return GivePage(donation_info=info)

    # -- Helpers ---------------------------------------------------------------

    def _ordered(self, table: str, column: str, ascending: bool) -> TableQuery:
        return self.backend.table(table).select().order(column, ascending)

    async def _section(
        self,
        model: type[BaseModel],
        query: TableQuery,
        fallback: Callable[[], list] | None = None,
        fallback_when_empty: bool = False,
    ) -> Section:
        section_type = Section[model]
        try:
            rows = await query.execute()
            items = parse_rows(model, rows, query.table)
        except SiteError as e:
            message = describe_error(e)
            if fallback is not None:
                logger.warning(
                    f"Serving built-in {query.table} content", extra={"table": query.table},
                )
                return section_type(items=fallback(), error=message, fallback=True)
            return section_type(error=message)
        if not items and fallback_when_empty and fallback is not None:
            return section_type(items=fallback(), fallback=True)
        return section_type(items=items)
