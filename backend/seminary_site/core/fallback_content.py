"""Fallback Content — built-in datasets shown when the backend is unreachable or empty.

Invariants:
    - Pure data + pure functions: every call returns fresh record instances
    - Fallback records validate against the same types as backend rows
    - default_courses() covers each program type with three courses
"""

from seminary_site.schemas.content import (
    Banner, Course, DownloadItem, Statistic, Video,
)
from seminary_site.schemas.people import AlumniProfile

_UNSPLASH = "https://images.unsplash.com"
_SAMPLE_PDF = "https://www.africau.edu/images/default/sample.pdf"


def default_banners() -> list[Banner]:
    return [Banner(
        id="default",
        title="Welcome to Maranatha Biblical Seminary",
        subtitle="Empowering future leaders with biblical wisdom and practical ministry skills",
        image_url=f"{_UNSPLASH}/photo-1519681393784-d120267933ba?auto=format&fit=crop&w=1950&q=80",
        button_text="Explore Programs",
        button_link="/courses",
    )]


def default_statistics() -> list[Statistic]:
    return [
        Statistic(id="graduates", title="Graduates", value=1000, icon_name="GraduationCap"),
        Statistic(id="students", title="Current Students", value=500, icon_name="Users"),
        Statistic(id="courses", title="Courses", value=50, icon_name="BookOpen"),
    ]


def default_video() -> Video:
    return Video(
        id="1",
        title="Introduction to Biblical Studies",
        subtitle="Learn the fundamentals",
        video_url="https://www.youtube.com/watch?v=dQw4w9WgXcQ",
        thumbnail_url=f"{_UNSPLASH}/photo-1519681393784-d120267933ba",
        description="Learn the fundamentals of Biblical studies with our expert faculty.",
    )


_COURSES = {
    "residential": [
        ("r1", "Bachelor of Theology", "4 years", "Full-time", "40 students",
         "A comprehensive program covering biblical studies, theology, and practical ministry skills."),
        ("r2", "Master of Divinity", "3 years", "Full-time", "30 students",
         "Advanced theological training for pastoral ministry and leadership roles."),
        ("r3", "Master of Theology", "2 years", "Full-time", "20 students",
         "Specialized research-oriented program for advanced theological scholarship."),
    ],
    "hybrid": [
        ("h1", "Bachelor of Theology (Hybrid)", "5 years", "Part-time", "50 students",
         "Flexible program combining online learning with periodic campus visits."),
        ("h2", "Graduate Certificate in Ministry", "1 year", "Part-time", "25 students",
         "Focused program for specific ministry skill development."),
        ("h3", "Master of Arts in Ministry", "3 years", "Part-time", "35 students",
         "Advanced program for ministry leaders seeking deeper theological understanding."),
    ],
    "online": [
        ("o1", "Online Certificate in Biblical Studies", "1 year", "Flexible", "100 students",
         "Foundation program for biblical knowledge and interpretation."),
        ("o2", "Online Bachelor of Ministry", "4 years", "Flexible", "75 students",
         "Comprehensive online program for ministry preparation."),
        ("o3", "Online Master of Biblical Studies", "2 years", "Flexible", "60 students",
         "Advanced online program for biblical scholarship and research."),
    ],
}


def default_courses(program_type: str) -> list[Course]:
    return [
        Course(
            id=cid, title=title, duration=duration, schedule=schedule,
            intake=intake, description=description, program_type=program_type,
        )
        for cid, title, duration, schedule, intake, description
        in _COURSES.get(program_type, [])
    ]


def default_downloads() -> list[DownloadItem]:
    rows = [
        ("1", "Academic Calendar 2025", "Complete academic schedule for the year 2025",
         "photo-1506784983877-45594efa4cbe", "Academic"),
        ("2", "Student Handbook", "Guidelines and policies for students",
         "photo-1532012197267-da84d127e765", "Guidelines"),
        ("3", "Course Catalog", "Detailed information about our programs",
         "photo-1497633762265-9d179a990aa6", "Academic"),
        ("4", "Library Resources", "Guide to library services and resources",
         "photo-1481627834876-b7833e8f5570", "Resources"),
    ]
    return [
        DownloadItem(
            id=did, title=title, description=description, file_url=_SAMPLE_PDF,
            image_url=f"{_UNSPLASH}/{photo}?auto=format&fit=crop&w=1350&q=80",
            category=category,
        )
        for did, title, description, photo, category in rows
    ]


_ALUMNI = [
    ("1", "Dr. Samuel Johnson", 2010, "Doctor of Ministry", "Senior Pastor",
     "Grace Community Church", "Atlanta, GA", "photo-1507003211169-0a1dd7228f2d",
     "Dr. Johnson has been serving as a senior pastor for over 10 years, focusing on community outreach and discipleship.",
     "My time at Maranatha shaped my theological understanding and prepared me for the challenges of pastoral ministry."),
    ("2", "Rev. Sarah Williams", 2015, "Master of Divinity", "Missionary",
     "Global Missions International", "Nairobi, Kenya", "photo-1494790108377-be9c29b29330",
     "Rev. Williams has been serving in East Africa since graduation, focusing on theological education and church planting.",
     "The cross-cultural training I received at Maranatha was invaluable for my work on the mission field."),
    ("3", "Prof. Michael Chen", 2008, "Master of Theology", "Associate Professor",
     "Pacific Theological Seminary", "San Francisco, CA", "photo-1500648767791-00dcc994a43e",
     "Prof. Chen specializes in Biblical Hebrew and Old Testament studies, with several published works in the field.",
     "The rigorous academic environment at Maranatha prepared me well for a career in theological education."),
    ("4", "Rev. David Okonkwo", 2018, "Bachelor of Theology", "Youth Pastor",
     "Living Word Church", "Lagos, Nigeria", "photo-1463453091185-61582044d556",
     "Rev. Okonkwo leads a vibrant youth ministry and has developed innovative programs for discipling young people.",
     "The practical ministry experience I gained at Maranatha gave me the tools I needed to effectively reach young people."),
    ("5", "Dr. Rachel Thompson", 2012, "Doctor of Ministry", "Counseling Director",
     "Restoration Counseling Center", "Denver, CO", "photo-1438761681033-6461ffad8d80",
     "Dr. Thompson integrates theological insights with clinical counseling practices to provide holistic care.",
     "My education at Maranatha taught me to address both spiritual and psychological needs in counseling."),
    ("6", "Rev. James Wilson", 2016, "Master of Divinity", "Church Planter",
     "New Life Fellowship", "Portland, OR", "photo-1472099645785-5658abf4ff4e",
     "Rev. Wilson has successfully planted three churches in urban areas, focusing on community engagement and social justice.",
     "Maranatha equipped me with both the theological foundation and practical skills needed for church planting."),
]


def default_alumni() -> list[AlumniProfile]:
    return [
        AlumniProfile(
            id=aid, name=name, graduation_year=year, degree=degree,
            current_position=position, organization=organization,
            location=location,
            image_url=f"{_UNSPLASH}/{photo}?auto=format&fit=crop&w=500&q=60",
            bio=bio, testimonial=testimonial,
        )
        for aid, name, year, degree, position, organization, location, photo, bio, testimonial
        in _ALUMNI
    ]
