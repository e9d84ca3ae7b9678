"""Fixture job listings for demo mode.

Only served when the job service is built with ``demo_mode=True``.
"""

from typing import Any

from src.core.schemas import JobListing, SearchFilters, SearchResultPage
from src.search.location import haversine_km

DEMO_JOBS: list[dict[str, Any]] = [
    {
        "id": 1,
        "uuid": "demo-job-1",
        "title": "Senior React Developer",
        "description": "Looking for an experienced React developer to join our team.",
        "company_name": "TechCorp Malaysia",
        "location": {
            "address": "Level 15, Menara KLCC",
            "city": "Kuala Lumpur",
            "latitude": 3.1579,
            "longitude": 101.7116,
        },
        "job_type": "full_time",
        "salary_min": 8000,
        "salary_max": 12000,
        "salary_currency": "MYR",
        "salary_period": "monthly",
        "required_skills": [{"id": 1, "name": "React"}, {"id": 2, "name": "TypeScript"}],
        "is_remote": True,
    },
    {
        "id": 2,
        "uuid": "demo-job-2",
        "title": "Part-time Graphic Designer",
        "description": "Creative designer needed for various marketing projects.",
        "company_name": "Creative Studio PJ",
        "location": {
            "address": "3 Two Square, Petaling Jaya",
            "city": "Petaling Jaya",
            "latitude": 3.1073,
            "longitude": 101.6067,
        },
        "job_type": "part_time",
        "salary_min": 20,
        "salary_max": 35,
        "salary_currency": "MYR",
        "salary_period": "hourly",
        "required_skills": [{"id": 4, "name": "Photoshop"}, {"id": 5, "name": "Illustrator"}],
    },
    {
        "id": 3,
        "uuid": "demo-job-3",
        "title": "Backend Python Developer",
        "description": "Build scalable APIs and backend services.",
        "company_name": "DataFlow Systems",
        "location": {
            "address": "Bangsar South, KL",
            "city": "Kuala Lumpur",
            "latitude": 3.1100,
            "longitude": 101.6685,
        },
        "job_type": "full_time",
        "salary_min": 6000,
        "salary_max": 10000,
        "salary_currency": "MYR",
        "salary_period": "monthly",
        "required_skills": [{"id": 6, "name": "Python"}, {"id": 7, "name": "Django"}],
        "is_remote": True,
    },
    {
        "id": 4,
        "uuid": "demo-job-4",
        "title": "F&B Crew (Part-Time)",
        "description": "Looking for friendly crew members for weekend shifts.",
        "company_name": "Kopitiam Express",
        "location": {
            "address": "Pavilion KL, Bukit Bintang",
            "city": "Kuala Lumpur",
            "latitude": 3.1488,
            "longitude": 101.7131,
        },
        "job_type": "part_time",
        "salary_min": 12,
        "salary_max": 15,
        "salary_currency": "MYR",
        "salary_period": "hourly",
        "required_skills": [{"id": 11, "name": "Customer Service"}],
    },
]


def demo_job_page(filters: SearchFilters) -> SearchResultPage[JobListing]:
    """Filter the fixtures the way the backend would and return one page."""
    jobs = [JobListing.from_api(raw) for raw in DEMO_JOBS]

    terms = [t.lower() for t in (filters.query.strip(), *filters.skill_names) if t]
    if terms:
        jobs = [
            j for j in jobs
            if any(
                t in j.title.lower() or t in j.company_name.lower() or t in j.description.lower()
                for t in terms
            )
        ]
    if filters.job_type is not None:
        jobs = [j for j in jobs if j.job_type == filters.job_type]

    loc = filters.location
    if loc is not None:
        jobs = [
            j.model_copy(update={
                "distance_km": haversine_km(loc.latitude, loc.longitude, j.latitude or 0.0, j.longitude or 0.0),
            })
            for j in jobs
        ]
        jobs = [j for j in jobs if (j.distance_km or 0.0) <= loc.radius_km]
        jobs.sort(key=lambda j: j.distance_km or 0.0)

    start = (filters.page - 1) * filters.page_size
    window = jobs[start:start + filters.page_size]
    return SearchResultPage[JobListing](
        total=len(jobs),
        page=filters.page if window else 1,
        page_size=filters.page_size,
        entries=tuple(window),
        is_demo=True,
    )
