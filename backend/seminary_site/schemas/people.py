"""People Records — teachers and alumni profiles."""

from pydantic import BaseModel, Field, field_validator

from seminary_site.schemas.content import Record


class Teacher(Record):
    name: str
    position: str = ""
    image_url: str | None = None
    bio: str = ""
    facebook_url: str | None = None
    twitter_url: str | None = None
    instagram_url: str | None = None
    linkedin_url: str | None = None


class TeacherWrite(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    position: str = Field("", max_length=200)
    image_url: str | None = None
    bio: str = Field("", max_length=5000)
    facebook_url: str | None = None
    twitter_url: str | None = None
    instagram_url: str | None = None
    linkedin_url: str | None = None


class AlumniProfile(Record):
    name: str
    graduation_year: int
    degree: str
    current_position: str = ""
    organization: str = ""
    location: str = ""
    image_url: str | None = None
    bio: str = ""
    testimonial: str | None = None


class AlumniProfileWrite(BaseModel):
    """Alumni profile input — shared by self-registration and admin edits."""
    name: str = Field(min_length=1, max_length=200)
    graduation_year: int = Field(ge=1900, le=2100)
    degree: str = Field(min_length=1, max_length=200)
    current_position: str = Field("", max_length=200)
    organization: str = Field("", max_length=200)
    location: str = Field("", max_length=200)
    image_url: str | None = None
    bio: str = Field("", max_length=5000)
    testimonial: str | None = Field(None, max_length=2000)

    @field_validator("name", "degree")
    @classmethod
    def strip_required(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("cannot be empty or whitespace")
        return v
