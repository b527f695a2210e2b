"""Recruitment — job postings and candidate pipeline, held in view memory."""

from __future__ import annotations

import copy
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from hrm.common.constants import CANDIDATE_PIPELINE, CandidateStatus, JobStatus
from hrm.common.exceptions import NotFoundException, ValidationException
from hrm.common.filters import apply_search
from hrm.notifications import NotificationBus
from hrm.records.store import generate_id
from hrm.views.base import FeatureView


class JobPosting(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    id: str
    title: str
    department: str = ""
    location: str = ""
    type: str = "full-time"
    salary: str = ""
    posted: str = ""
    deadline: str = ""
    status: JobStatus = JobStatus.draft
    applicants: int = 0
    description: str = ""


class Candidate(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    id: str
    name: str
    email: str
    phone: str = ""
    position: str = ""
    experience: str = ""
    status: CandidateStatus = CandidateStatus.applied
    applied_date: str = ""
    resume: str = ""


class PipelineStats(BaseModel):
    active_jobs: int = 0
    total_candidates: int = 0
    interviewing: int = 0
    hired: int = 0
    by_status: dict[str, int] = Field(default_factory=dict)


SAMPLE_JOBS: list[dict[str, Any]] = [
    {
        "id": "job_1",
        "title": "Senior Frontend Developer",
        "department": "Engineering",
        "location": "Remote / San Francisco",
        "type": "full-time",
        "salary": "$120,000 - $150,000",
        "posted": "2024-01-15",
        "deadline": "2024-02-15",
        "status": "active",
        "applicants": 24,
        "description": "We are looking for an experienced frontend developer...",
    },
    {
        "id": "job_2",
        "title": "Product Manager",
        "department": "Product",
        "location": "New York",
        "type": "full-time",
        "salary": "$130,000 - $160,000",
        "posted": "2024-01-10",
        "deadline": "2024-02-10",
        "status": "active",
        "applicants": 18,
        "description": "Join our product team to drive innovation...",
    },
    {
        "id": "job_3",
        "title": "UX Designer Intern",
        "department": "Design",
        "location": "Remote",
        "type": "intern",
        "salary": "$25/hour",
        "posted": "2024-01-05",
        "deadline": "2024-01-25",
        "status": "closed",
        "applicants": 45,
        "description": "Summer internship opportunity for UX design students...",
    },
]

SAMPLE_CANDIDATES: list[dict[str, Any]] = [
    {
        "id": "cand_1",
        "name": "Alice Johnson",
        "email": "alice.johnson@email.com",
        "phone": "+1 (555) 123-4567",
        "position": "Senior Frontend Developer",
        "experience": "5 years",
        "status": "interview",
        "applied_date": "2024-01-20",
        "resume": "alice_johnson_resume.pdf",
    },
    {
        "id": "cand_2",
        "name": "Bob Smith",
        "email": "bob.smith@email.com",
        "phone": "+1 (555) 987-6543",
        "position": "Product Manager",
        "experience": "7 years",
        "status": "offer",
        "applied_date": "2024-01-18",
        "resume": "bob_smith_resume.pdf",
    },
    {
        "id": "cand_3",
        "name": "Carol Davis",
        "email": "carol.davis@email.com",
        "phone": "+1 (555) 456-7890",
        "position": "UX Designer Intern",
        "experience": "1 year",
        "status": "hired",
        "applied_date": "2024-01-15",
        "resume": "carol_davis_resume.pdf",
    },
]


class RecruitmentView(FeatureView[Candidate]):
    """Candidates are the view's records; job postings live alongside them."""

    title = "candidates"
    entity = "Candidate"
    search_fields = ("name", "email", "position")
    filter_fields = ("status",)
    required_fields = ("name", "email")
    job_search_fields = ("title", "department", "location")

    def __init__(
        self,
        bus: Optional[NotificationBus] = None,
        *,
        jobs: Optional[list[dict[str, Any]]] = None,
        candidates: Optional[list[dict[str, Any]]] = None,
    ) -> None:
        super().__init__(bus)
        self.jobs: list[JobPosting] = [
            JobPosting.model_validate(j) for j in copy.deepcopy(SAMPLE_JOBS if jobs is None else jobs)
        ]
        self._candidates: list[Candidate] = [
            Candidate.model_validate(c)
            for c in copy.deepcopy(SAMPLE_CANDIDATES if candidates is None else candidates)
        ]

    async def fetch(self) -> list[Candidate]:
        return list(self._candidates)

    @property
    def filtered_jobs(self) -> list[JobPosting]:
        return apply_search(self.jobs, self.search_term, self.job_search_fields)

    def pipeline_stats(self) -> PipelineStats:
        by_status = {s.value: 0 for s in CandidateStatus}
        for candidate in self._candidates:
            by_status[candidate.status] += 1
        return PipelineStats(
            active_jobs=sum(1 for j in self.jobs if j.status == JobStatus.active),
            total_candidates=len(self._candidates),
            interviewing=by_status[CandidateStatus.interview.value],
            hired=by_status[CandidateStatus.hired.value],
            by_status=by_status,
        )

    # ── Candidates ──────────────────────────────────────────────────

    async def create(self, values: dict[str, Any]) -> Candidate:
        candidate = Candidate.model_validate({**values, "id": generate_id("cand")})
        self._candidates.append(candidate)
        return candidate

    async def update(self, record_id: str, values: dict[str, Any]) -> Candidate:
        current = self._candidate(record_id)
        updated = Candidate.model_validate({**current.model_dump(), **values, "id": record_id})
        self._replace(updated)
        return updated

    async def remove(self, record_id: str) -> None:
        self._candidate(record_id)
        self._candidates = [c for c in self._candidates if c.id != record_id]

    def advance_candidate(self, record_id: str) -> Optional[Candidate]:
        """Move one step along applied → screening → interview → offer → hired."""
        try:
            candidate = self._candidate(record_id)
            stages = [s.value for s in CANDIDATE_PIPELINE]
            if candidate.status not in stages or candidate.status == stages[-1]:
                raise ValidationException(
                    {"status": [f"Cannot advance a candidate who is '{candidate.status}'"]},
                )
        except (NotFoundException, ValidationException) as e:
            self._fail(e, "Candidate update failed")
            return None

        next_status = stages[stages.index(candidate.status) + 1]
        updated = candidate.model_copy(update={"status": next_status})
        self._replace(updated)
        self.bus.success("Candidate advanced", f"{updated.name} → {next_status}")
        return updated

    def reject_candidate(self, record_id: str) -> Optional[Candidate]:
        try:
            candidate = self._candidate(record_id)
        except NotFoundException as e:
            self._fail(e, "Candidate update failed")
            return None
        updated = candidate.model_copy(update={"status": CandidateStatus.rejected.value})
        self._replace(updated)
        self.bus.success("Candidate rejected", updated.name)
        return updated

    # ── Jobs ────────────────────────────────────────────────────────

    def add_job(self, values: dict[str, Any]) -> Optional[JobPosting]:
        if not values.get("title"):
            self.form_errors = {"title": "Title is required"}
            self.bus.warning("Validation Error", "Please fill in all required fields")
            return None
        job = JobPosting.model_validate({**values, "id": generate_id("job")})
        self.jobs.append(job)
        self.bus.success("Job posted", job.title)
        return job

    def close_job(self, job_id: str) -> Optional[JobPosting]:
        for index, job in enumerate(self.jobs):
            if job.id == job_id:
                self.jobs[index] = job.model_copy(update={"status": JobStatus.closed.value})
                self.bus.success("Job closed", job.title)
                return self.jobs[index]
        self._fail(NotFoundException("Job posting", job_id), "Job update failed")
        return None

    # ── Internal helpers ────────────────────────────────────────────

    def _candidate(self, record_id: str) -> Candidate:
        for candidate in self._candidates:
            if candidate.id == record_id:
                return candidate
        raise NotFoundException(self.entity, record_id)

    def _replace(self, candidate: Candidate) -> None:
        self._candidates = [candidate if c.id == candidate.id else c for c in self._candidates]
        self.records = list(self._candidates)
