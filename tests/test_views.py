"""Feature view tests — load / search / filter / form / delete per module.

Remote views talk to the in-memory FastAPI backend; local views run on a
``MemoryStorage``. Views never raise: failures land on ``view.error`` and
on the notification bus.
"""

from __future__ import annotations

from datetime import date, datetime

import pytest

from hrm.common.constants import ModuleId, NotificationType, StorageKey
from hrm.common.exceptions import AUTH_REQUIRED_MESSAGE, ErrorKind
from hrm.records import seed_sample_data
from hrm.views import (
    AnalyticsReportsView,
    AttendanceManagementView,
    DocumentManagementView,
    EmployeeManagementView,
    MeetingsManagementView,
    OverviewView,
    PayrollManagementView,
    ProjectManagementView,
    RecruitmentView,
    SettingsView,
    build_views,
)
from hrm.views.attendance import hours_between
from hrm.views.base import FeatureView
from tests.conftest import always, fixed_today


# ═════════════════════════════════════════════════════════════════════
# REGISTRY
# ═════════════════════════════════════════════════════════════════════


def test_build_views_covers_every_module(api, storage, bus):
    views = build_views(api, storage, bus)
    assert set(views) == set(ModuleId)
    assert all(view.bus is bus for view in views.values())


class _CountView(FeatureView[dict]):
    required_fields = ("name", "quantity")


def test_zero_counts_as_a_value():
    view = _CountView()
    assert view.validate_form({"name": "Badges", "quantity": 0}) == {}
    assert view.validate_form({"name": "", "quantity": None}) == {
        "name": "Name is required",
        "quantity": "Quantity is required",
    }


# ═════════════════════════════════════════════════════════════════════
# EMPLOYEES
# ═════════════════════════════════════════════════════════════════════


class TestEmployeeManagementView:
    async def test_load(self, admin_api, bus):
        view = EmployeeManagementView(admin_api, bus)
        assert await view.load() is True
        assert len(view.records) == 4
        assert view.departments == ["Engineering", "Human Resources", "Marketing"]

    async def test_search_and_filters(self, admin_api, bus):
        view = EmployeeManagementView(admin_api, bus)
        await view.load()

        view.search_term = "JANE"
        assert [e.name for e in view.filtered] == ["Jane Smith"]

        view.search_term = "EMP00"
        view.set_filter("department", "Engineering")
        assert len(view.filtered) == 2

        view.set_filter("status", "terminated")
        assert [e.id for e in view.filtered] == ["e3"]

        view.search_term = ""
        view.set_filter("department", "all")
        view.set_filter("status", "all")
        assert len(view.filtered) == 4

    async def test_load_without_login(self, api, bus, backend):
        view = EmployeeManagementView(api, bus)

        assert await view.load() is False
        assert view.error == AUTH_REQUIRED_MESSAGE
        assert view.error_kind is ErrorKind.unauthenticated
        assert view.records == []
        assert bus.latest().type == NotificationType.error
        assert bus.latest().title == "Failed to load employees"
        assert backend.state.requests == []

    async def test_load_forbidden_then_retry(self, employee_api, bus):
        view = EmployeeManagementView(employee_api, bus)
        assert await view.load() is False
        assert view.error_kind is ErrorKind.forbidden

        await employee_api.login({"email": "admin@company.com", "password": "admin123"})
        assert await view.retry() is True
        assert view.error is None

    async def test_submit_create(self, admin_api, bus):
        view = EmployeeManagementView(admin_api, bus)
        await view.load()

        view.open_create({"name": "Nina Patel", "email": "nina@company.com", "department": "Sales"})
        assert await view.submit() is not None

        assert view.form.is_open is False
        assert len(view.records) == 5
        assert bus.latest().title == "Employee created successfully"

    async def test_submit_requires_name_and_email(self, admin_api, bus, backend):
        view = EmployeeManagementView(admin_api, bus)
        view.open_create({"name": "", "department": "Sales"})

        assert await view.submit() is None
        assert view.form_errors == {"name": "Name is required", "email": "Email is required"}
        assert view.form.is_open is True
        assert bus.latest().type == NotificationType.warning
        assert ("POST", "/api/dashboard/admin/add_employee") not in backend.state.requests

    async def test_submit_update(self, admin_api, bus):
        view = EmployeeManagementView(admin_api, bus)
        await view.load()

        view.open_edit(view.find("e4"))
        assert view.form.values["email"] == "sara.lee@company.com"
        view.form.values["position"] = "Marketing Lead"
        await view.submit()

        assert view.find("e4").position == "Marketing Lead"
        assert bus.latest().title == "Employee updated successfully"

    async def test_submit_server_error_keeps_form_open(self, admin_api, bus):
        view = EmployeeManagementView(admin_api, bus)
        view.open_create({"name": "Dup", "email": "john.doe@company.com"})

        assert await view.submit() is None
        assert view.form.is_open is True
        assert view.error == "Employee with this email already exists"
        assert bus.latest().title == "Failed to create employee"

    async def test_delete_declined_is_noop(self, admin_api, bus, backend):
        view = EmployeeManagementView(admin_api, bus)
        await view.load()

        assert await view.delete("e1", always(False)) is False
        assert not any(method == "DELETE" for method, _ in backend.state.requests)
        assert len(view.records) == 4

    async def test_delete_confirmed(self, admin_api, bus):
        view = EmployeeManagementView(admin_api, bus)
        await view.load()
        prompts: list[str] = []

        def confirm(message: str) -> bool:
            prompts.append(message)
            return True

        assert await view.delete("e1", confirm) is True
        assert prompts == ["Are you sure you want to delete this employee?"]
        assert view.find("e1") is None
        assert bus.latest().title == "Employee deleted successfully"

    async def test_delete_missing(self, admin_api, bus):
        view = EmployeeManagementView(admin_api, bus)
        assert await view.delete("nope", always(True)) is False
        assert view.error_kind is ErrorKind.not_found

    async def test_export_uses_filtered_rows(self, admin_api, bus):
        view = EmployeeManagementView(admin_api, bus)
        await view.load()
        view.set_filter("department", "Marketing")

        lines = view.export_csv().splitlines()
        assert len(lines) == 2
        assert lines[1].startswith('"Sara Lee","sara.lee@company.com"')

    async def test_import_reloads(self, admin_api, bus):
        view = EmployeeManagementView(admin_api, bus)
        await view.load()

        report = await view.import_csv(
            "name,email,department\n"
            "Amy Adams,amy@company.com,Design\n"
            "Bad Row,,Design\n"
        )
        assert (report.succeeded, report.failed) == (1, 1)
        assert len(view.records) == 5
        assert bus.latest().title == "Import complete"


# ═════════════════════════════════════════════════════════════════════
# PROJECTS
# ═════════════════════════════════════════════════════════════════════


class TestProjectManagementView:
    async def test_load_with_analytics(self, admin_api, bus):
        view = ProjectManagementView(admin_api, bus)
        assert await view.load() is True

        assert [p.id for p in view.records] == ["p1", "p2"]
        assert len(view.employees) == 4
        assert view.profits_summary.total_profit == 125000
        assert [a.project_id for a in view.analytics] == ["p1", "p2"]

    async def test_search_client_company(self, admin_api, bus):
        view = ProjectManagementView(admin_api, bus)
        await view.load()

        view.search_term = "acme"
        assert [p.name for p in view.filtered] == ["Website Revamp"]

        view.search_term = ""
        view.set_filter("status", "completed")
        assert [p.id for p in view.filtered] == ["p2"]

    async def test_portfolio_metrics(self, admin_api, bus):
        view = ProjectManagementView(admin_api, bus)
        await view.load()
        metrics = view.portfolio_metrics()

        assert metrics.total_projects == 2
        assert metrics.active_projects == 1
        assert metrics.completed_projects == 1
        assert metrics.overdue_projects == 1
        assert metrics.average_progress == 75.0
        assert metrics.total_team_members == 1
        assert metrics.total_value == 150000
        assert metrics.total_profit == 125000
        assert metrics.status_distribution == {"active": 1, "completed": 1}
        assert [m.month for m in metrics.monthly] == ["Nov 2025", "Jan 2026"]

    async def test_portfolio_metrics_empty(self, admin_api, bus):
        view = ProjectManagementView(admin_api, bus)
        assert view.portfolio_metrics().total_projects == 0

    async def test_create_requires_fields(self, admin_api, bus):
        view = ProjectManagementView(admin_api, bus)
        view.open_create()

        assert await view.submit() is None
        assert set(view.form_errors) == {"name", "project_value", "end_date"}

    @pytest.mark.parametrize("value", [0, -500, "lots"])
    async def test_project_value_must_be_positive(self, admin_api, bus, backend, value):
        view = ProjectManagementView(admin_api, bus)
        view.open_create({"name": "Free Pilot", "project_value": value, "end_date": "2026-12-31"})

        assert await view.submit() is None
        assert view.form_errors == {"project_value": "Project value must be greater than zero"}
        assert ("POST", "/api/projects") not in backend.state.requests

    async def test_create_defaults_start_date(self, admin_api, bus, backend):
        view = ProjectManagementView(admin_api, bus)
        await view.load()
        view.open_create({"name": "CRM Rollout", "project_value": 25000, "end_date": "2026-12-31"})

        created = await view.submit()

        assert created.name == "CRM Rollout"
        assert created.start_date
        assert len(view.records) == 3
        stored = backend.state.db["projects"][-1]
        assert stored["project_value"] == 25000
        assert stored["payment_type"] == "milestone"

    async def test_update(self, admin_api, bus):
        view = ProjectManagementView(admin_api, bus)
        await view.load()

        view.open_edit(view.find("p1"))
        view.form.values["status"] = "on-hold"
        updated = await view.submit()

        assert updated.status.value == "on-hold"
        assert view.find("p1").status.value == "on-hold"

    async def test_team_members(self, admin_api, bus):
        view = ProjectManagementView(admin_api, bus)
        await view.load()
        p2 = view.find("p2")
        assert len(view.team_candidates(p2)) == 4

        project = await view.add_team_member("p2", "e2", role="analyst", amount=5000)
        assert [m.employee.id for m in project.team] == ["e2"]
        assert project.total_allocations == 5000
        assert view.find("p2").profit == 45000
        assert [e.id for e in view.team_candidates(view.find("p2"))] == ["e1", "e3", "e4"]

        project = await view.remove_team_member("p2", "e2")
        assert project.team == []

    async def test_team_member_duplicate(self, admin_api, bus):
        view = ProjectManagementView(admin_api, bus)
        await view.load()

        assert await view.add_team_member("p1", "e1") is None
        assert view.error == "Employee already in team"
        assert bus.latest().title == "Failed to add team member"

    async def test_milestones(self, admin_api, bus):
        view = ProjectManagementView(admin_api, bus)
        await view.load()

        project = await view.add_milestone("p1", {"title": "Launch", "due_date": "2026-06-01"})
        assert [m.title for m in project.milestones] == ["Design", "Build", "Launch"]
        assert project.milestones[-1].due_date == "2026-06-01"

        project = await view.update_milestone("p1", "m2", {"status": "completed"})
        assert project.completed_milestones == 2

    async def test_milestone_requires_title(self, admin_api, bus, backend):
        view = ProjectManagementView(admin_api, bus)

        assert await view.add_milestone("p1", {"description": "no title"}) is None
        assert view.error_kind is ErrorKind.validation
        assert ("POST", "/api/projects/p1/milestones") not in backend.state.requests

    async def test_analytics_failure_is_only_logged(self, admin_api, bus, caplog):
        view = ProjectManagementView(admin_api, bus)
        await view.load()
        unknown = view.records[0].model_copy(update={"id": "missing"})

        await view.load_analytics([*view.records, unknown])

        assert "ProjectManagementView.load_analytics" in caplog.text
        assert view.error is None
        assert len(view.analytics) == 2


# ═════════════════════════════════════════════════════════════════════
# ATTENDANCE
# ═════════════════════════════════════════════════════════════════════


class TestAttendanceManagementView:
    async def test_check_in_on_time_and_late(self, stores, bus):
        view = AttendanceManagementView(stores.attendance, bus)

        on_time = view.check_in("emp_1", "John Doe", at=datetime(2026, 2, 20, 8, 55))
        late = view.check_in("emp_2", "Jane Smith", at=datetime(2026, 2, 20, 9, 20))

        assert on_time.status == "present"
        assert late.status == "late"
        assert late.check_in == "09:20"
        assert bus.latest().title == "Attendance updated successfully!"
        assert len(view.records) == 2

    async def test_duplicate_check_in(self, stores, bus):
        view = AttendanceManagementView(stores.attendance, bus)
        view.check_in("emp_1", at=datetime(2026, 2, 20, 8, 55))

        assert view.check_in("emp_1", at=datetime(2026, 2, 20, 12, 0)) is None
        assert view.error_kind is ErrorKind.validation
        assert len(stores.attendance.get_all()) == 1

    async def test_check_out_sets_hours(self, stores, bus):
        view = AttendanceManagementView(stores.attendance, bus)
        record = view.check_in("emp_1", at=datetime(2026, 2, 20, 9, 15))

        updated = view.check_out(record.id, at=datetime(2026, 2, 20, 17, 30))
        assert updated.check_out == "17:30"
        assert updated.hours_worked == 8.25

    async def test_check_out_unknown(self, stores, bus):
        view = AttendanceManagementView(stores.attendance, bus)
        assert view.check_out("att_missing") is None
        assert view.error_kind is ErrorKind.validation

    async def test_day_summary(self, stores, bus):
        for status, hours in (("present", 8), ("late", 7), ("absent", 0), ("half-day", 4)):
            stores.attendance.add({
                "employee_id": f"emp_{status}", "date": "2026-02-20", "status": status, "hours_worked": hours,
            })
        stores.attendance.add({"employee_id": "emp_x", "date": "2026-02-19"})
        view = AttendanceManagementView(stores.attendance, bus)
        await view.load()

        summary = view.day_summary("2026-02-20")
        assert summary.total == 4
        assert summary.absent == 1
        assert summary.attendance_rate == 75.0
        assert summary.average_hours == 6.3

        view.set_filter("date", "2026-02-19")
        assert len(view.filtered) == 1

    async def test_empty_day_summary(self, stores, bus):
        view = AttendanceManagementView(stores.attendance, bus)
        assert view.day_summary("2026-02-20").attendance_rate == 0

    def test_hours_between(self):
        assert hours_between("09:00", "17:20") == 8.33
        assert hours_between("18:00", "09:00") == 0


# ═════════════════════════════════════════════════════════════════════
# PAYROLL
# ═════════════════════════════════════════════════════════════════════


class TestPayrollManagementView:
    async def test_run_payroll(self, stores, bus):
        seed_sample_data(stores)
        stores.employees.add({"name": "Gone", "email": "gone@company.com", "salary": 1, "status": "terminated"})
        view = PayrollManagementView(stores.payroll, bus)

        created = view.run_payroll("2026-02", stores.employees.get_all())

        assert len(created) == 3
        john = next(r for r in created if r.employee_name == "John Doe")
        assert john.base_salary == 6250
        assert john.net_salary == 6250
        assert john.status == "pending"
        assert view.run_payroll("2026-02", stores.employees.get_all()) == []

    async def test_status_workflow(self, stores, bus):
        view = PayrollManagementView(stores.payroll, bus)
        record = stores.payroll.add({"employee_id": "emp_1", "base_salary": 4000, "pay_period": "2026-02"})

        assert view.mark_paid(record.id) is None
        assert view.error_kind is ErrorKind.validation

        assert view.process(record.id).status == "processed"
        assert view.process(record.id) is None
        assert view.mark_paid(record.id).status == "paid"

    async def test_unknown_record(self, stores, bus):
        view = PayrollManagementView(stores.payroll, bus)
        assert view.process("pay_missing") is None
        assert view.error_kind is ErrorKind.not_found

    async def test_stats_follow_filters(self, stores, bus):
        stores.payroll.add({"employee_id": "a", "base_salary": 3000, "pay_period": "2026-01", "status": "paid"})
        stores.payroll.add({"employee_id": "a", "base_salary": 4000, "pay_period": "2026-02"})
        stores.payroll.add({
            "employee_id": "b", "base_salary": 5000, "pay_period": "2026-02", "status": "processed",
        })
        view = PayrollManagementView(stores.payroll, bus)
        await view.load()

        stats = view.stats()
        assert stats.total_payroll == 12000
        assert stats.average_net == 4000
        assert stats.pending_count == 1
        assert stats.paid_amount == 3000

        view.set_filter("pay_period", "2026-02")
        stats = view.stats()
        assert stats.total_payroll == 9000
        assert stats.processed_amount == 5000
        assert stats.paid_amount == 0

    async def test_stats_empty(self, stores, bus):
        assert PayrollManagementView(stores.payroll, bus).stats().total_payroll == 0


# ═════════════════════════════════════════════════════════════════════
# DOCUMENTS
# ═════════════════════════════════════════════════════════════════════


class TestDocumentManagementView:
    async def test_upload_archive_restore(self, stores, bus):
        view = DocumentManagementView(stores.documents, bus)

        doc = view.upload("Handbook.pdf", type="pdf", size=2048, uploaded_by="HR", category="Policies",
                          today=date(2026, 2, 20))
        assert doc.upload_date == "2026-02-20"
        assert view.archive(doc.id).status == "archived"
        assert view.stats().archived == 1
        assert view.restore(doc.id).status == "active"
        assert bus.latest().title == "Document restored"

    async def test_stats_and_categories(self, stores, bus):
        view = DocumentManagementView(stores.documents, bus)
        view.upload("a.pdf", size=100, category="Policies")
        view.upload("b.pdf", size=50, category="Contracts")
        view.upload("c.pdf", size=25)

        stats = view.stats()
        assert stats.total == 3
        assert stats.total_size == 175
        assert stats.by_category == {"Policies": 1, "Contracts": 1, "General": 1}
        assert view.categories == ["Contracts", "General", "Policies"]

    async def test_archive_unknown(self, stores, bus):
        view = DocumentManagementView(stores.documents, bus)
        assert view.archive("doc_missing") is None
        assert view.error_kind is ErrorKind.not_found

    async def test_submit_and_delete(self, stores, bus):
        view = DocumentManagementView(stores.documents, bus)
        view.open_create({"name": "Policy.pdf", "category": "Policies"})
        saved = await view.submit()

        view.search_term = "policy"
        assert [d.id for d in view.filtered] == [saved.id]

        assert await view.delete(saved.id, always(True)) is True
        assert view.records == []


# ═════════════════════════════════════════════════════════════════════
# MEETINGS
# ═════════════════════════════════════════════════════════════════════


class TestMeetingsManagementView:
    async def test_create_defaults(self, stores, bus):
        view = MeetingsManagementView(stores.meetings, bus)
        view.open_create({"title": "Planning", "date": "2026-02-23"})
        meeting = await view.submit()

        assert meeting.time == "09:00"
        assert meeting.duration == 30
        assert meeting.type == "video"
        assert meeting.status == "scheduled"

    async def test_stats(self, stores, bus):
        seed_sample_data(stores, today=date(2026, 2, 20))
        stores.meetings.add({"title": "Today", "date": "2026-02-20", "time": "08:00", "status": "completed"})
        view = MeetingsManagementView(stores.meetings, bus)
        await view.load()

        stats = view.stats(now=datetime(2026, 2, 20, 12, 0))
        assert stats.total == 2
        assert stats.today == 1
        assert stats.upcoming == 1
        assert stats.completed == 1

    async def test_transitions(self, stores, bus):
        view = MeetingsManagementView(stores.meetings, bus)
        meeting = stores.meetings.add({"title": "Review", "date": "2026-02-23"})

        assert view.start(meeting.id).status == "in-progress"
        assert view.reschedule(meeting.id, "2026-02-24", "10:00") is None
        assert view.complete(meeting.id).status == "completed"
        assert view.cancel(meeting.id) is None
        assert view.error_kind is ErrorKind.validation

    async def test_cancel_then_reschedule(self, stores, bus):
        view = MeetingsManagementView(stores.meetings, bus)
        meeting = stores.meetings.add({"title": "1:1", "date": "2026-02-23"})

        assert view.cancel(meeting.id).status == "cancelled"
        moved = view.reschedule(meeting.id, "2026-02-25", "14:30")
        assert (moved.date, moved.time, moved.status) == ("2026-02-25", "14:30", "scheduled")
        assert bus.latest().title == "Meeting rescheduled"

    async def test_reschedule_unknown(self, stores, bus):
        view = MeetingsManagementView(stores.meetings, bus)
        assert view.reschedule("meet_missing", "2026-02-25", "14:30") is None
        assert view.error_kind is ErrorKind.not_found


# ═════════════════════════════════════════════════════════════════════
# RECRUITMENT
# ═════════════════════════════════════════════════════════════════════


class TestRecruitmentView:
    async def test_sample_pipeline(self, bus):
        view = RecruitmentView(bus)
        await view.load()

        stats = view.pipeline_stats()
        assert stats.active_jobs == 2
        assert stats.total_candidates == 3
        assert stats.interviewing == 1
        assert stats.hired == 1

    async def test_advance_and_reject(self, bus):
        view = RecruitmentView(bus)
        await view.load()

        assert view.advance_candidate("cand_1").status == "offer"
        assert view.advance_candidate("cand_3") is None
        assert view.error_kind is ErrorKind.validation
        assert view.reject_candidate("cand_2").status == "rejected"
        assert view.advance_candidate("cand_2") is None
        assert view.pipeline_stats().by_status["rejected"] == 1

    async def test_unknown_candidate(self, bus):
        view = RecruitmentView(bus)
        assert view.reject_candidate("cand_missing") is None
        assert view.error_kind is ErrorKind.not_found

    async def test_candidate_crud(self, bus):
        view = RecruitmentView(bus, candidates=[])
        view.open_create({"name": "Dan Brown", "email": "dan@email.com", "position": "Product Manager"})
        created = await view.submit()
        assert created.status == "applied"

        view.open_edit(view.find(created.id))
        view.form.values["experience"] = "3 years"
        await view.submit()
        assert view.find(created.id).experience == "3 years"

        assert await view.delete(created.id, always(True)) is True
        assert view.records == []

    async def test_jobs(self, bus):
        view = RecruitmentView(bus)

        assert view.add_job({"department": "Sales"}) is None
        assert view.form_errors == {"title": "Title is required"}

        job = view.add_job({"title": "Account Executive", "status": "active"})
        assert job.id.startswith("job_")
        assert view.close_job(job.id).status == "closed"
        assert view.close_job("job_missing") is None

        view.search_term = "remote"
        assert {j.id for j in view.filtered_jobs} == {"job_1", "job_3"}


# ═════════════════════════════════════════════════════════════════════
# SETTINGS
# ═════════════════════════════════════════════════════════════════════


class TestSettingsView:
    async def test_defaults(self, storage, bus):
        view = SettingsView(storage, bus)
        await view.load()

        assert [s.id for s in view.records] == [
            "general", "security", "notifications", "appearance", "integrations", "billing",
        ]
        assert view.section("general")["company_name"] == "Omyra Technologies"
        assert view.section("appearance")["primary_color"] == "#3B82F6"

    async def test_update_persists(self, storage, bus):
        view = SettingsView(storage, bus)
        section = await view.update("appearance", {"theme": "dark"})

        assert section["theme"] == "dark"
        assert section["primary_color"] == "#3B82F6"
        assert storage.get(StorageKey.settings) == {"appearance": {"theme": "dark"}}
        assert SettingsView(storage, bus).section("appearance")["theme"] == "dark"

    async def test_submit_section(self, storage, bus):
        view = SettingsView(storage, bus)
        await view.load()

        view.open_section("general")
        view.form.values["company_name"] = "Acme Corp"
        await view.submit()

        assert view.section("general")["company_name"] == "Acme Corp"
        assert bus.latest().title == "Settings updated successfully"

    async def test_unknown_section(self, storage, bus):
        view = SettingsView(storage, bus)
        await view.load()
        view.form.open_edit("payments", {"x": 1})

        assert await view.submit() is None
        assert view.error_kind is ErrorKind.validation
        assert storage.get(StorageKey.settings) is None

    async def test_reset(self, storage, bus):
        view = SettingsView(storage, bus)
        await view.update("general", {"currency": "EUR"})

        await view.reset()
        assert storage.get(StorageKey.settings) is None
        assert view.section("general")["currency"] == "USD ($)"

    async def test_ignores_malformed_storage(self, storage, bus):
        storage.set(StorageKey.settings, ["not", "a", "dict"])
        assert SettingsView(storage, bus).section("security")["two_factor_auth"] is True


# ═════════════════════════════════════════════════════════════════════
# ANALYTICS / OVERVIEW
# ═════════════════════════════════════════════════════════════════════


class TestAnalyticsReportsView:
    async def test_report(self, admin_api, stores, bus):
        stores.payroll.add({"employee_id": "e1", "base_salary": 6250, "pay_period": "2026-02"})
        stores.attendance.add({"employee_id": "e1", "date": "2026-02-20", "status": "present"})
        stores.attendance.add({"employee_id": "e2", "date": "2026-02-20", "status": "absent"})
        view = AnalyticsReportsView(admin_api, stores, bus)
        await view.load()

        report = view.report(today=fixed_today())
        assert report.headcount == 4
        assert report.headcount_by_department["Engineering"] == 2
        assert report.attrition_rate == 25.0
        assert report.average_salary == 61250
        assert report.payroll_total == 6250
        assert report.attendance_rate == 50.0
        assert report.average_tenure_years > 0

    async def test_report_follows_department_filter(self, admin_api, stores, bus):
        view = AnalyticsReportsView(admin_api, stores, bus)
        await view.load()
        view.set_filter("department", "Engineering")

        report = view.report(today=fixed_today(), pay_period="2026-02")
        assert report.headcount == 2
        assert report.attrition_rate == 50.0
        assert report.payroll_total == 0


class TestOverviewView:
    async def test_load(self, admin_api, bus):
        view = OverviewView(admin_api, bus, today=fixed_today())
        assert await view.load() is True

        assert view.overview.growth_rate == 33.3
        assert [d.department for d in view.records][0] == "Engineering"
        assert view.needs_login is False

    async def test_needs_login(self, api, bus):
        view = OverviewView(api, bus)
        assert await view.load() is False
        assert view.needs_login is True
        assert view.overview is None
        assert bus.latest().title == "Failed to load dashboard data"
