"""Public Pages — read-only endpoints backing each page of the seminary site.

Invariants:
    - Page endpoints return 200 with per-section error/fallback flags when tables fail
    - Unknown program types return 404 (ResourceNotFoundError)
"""

from fastapi import APIRouter, Depends, Query

from seminary_site.api.dependencies import get_content_service
from seminary_site.schemas.content import Banner, Course, DownloadItem
from seminary_site.schemas.pages import (
    AboutPage,
    AlumniDirectory,
    CampusLifePage,
    GivePage,
    HomePage,
    ProgramCourses,
    Section,
)
from seminary_site.services.content_service import ContentService

router = APIRouter(prefix="/api/v1/pages", tags=["pages"])


@router.get("/home", response_model=HomePage)
async def home_page(content: ContentService = Depends(get_content_service)):
    return await content.home_page()


@router.get("/banners", response_model=Section[Banner])
async def banners(content: ContentService = Depends(get_content_service)):
    return await content.banners()


@router.get("/about", response_model=AboutPage)
async def about_page(content: ContentService = Depends(get_content_service)):
    return await content.about_page()


@router.get("/campus-life", response_model=CampusLifePage)
async def campus_life_page(content: ContentService = Depends(get_content_service)):
    return await content.campus_life_page()


@router.get("/courses", response_model=dict[str, Section[Course]])
async def courses(content: ContentService = Depends(get_content_service)):
    """All courses grouped by program type."""
    return await content.courses_by_program()


@router.get("/courses/{program_type}", response_model=ProgramCourses)
async def program_courses(
    program_type: str, content: ContentService = Depends(get_content_service),
):
    return await content.program_courses(program_type)


@router.get("/alumni", response_model=AlumniDirectory)
async def alumni_directory(
    search: str = Query("", max_length=200),
    year: int | None = Query(None, ge=1900, le=2100),
    degree: str | None = Query(None, max_length=200),
    content: ContentService = Depends(get_content_service),
):
    """Alumni directory with search, graduation year and degree filters."""
    return await content.alumni_directory(search, year, degree)


@router.get("/downloads", response_model=Section[DownloadItem])
async def downloads(content: ContentService = Depends(get_content_service)):
    return await content.downloads()


@router.get("/give", response_model=GivePage)
async def give_page(content: ContentService = Depends(get_content_service)):
    return await content.give_page()
