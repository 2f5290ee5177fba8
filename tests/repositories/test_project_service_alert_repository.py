# tests/repositories/test_project_service_alert_repository.py
from datetime import datetime

import pytest

from projectstore.database import models
from projectstore.repositories.query import FilterBy, SortBy, Order
from projectstore.repositories.sqlalchemy.sqlalchemy_project_service_alert_repository import (
    SqlalchemyProjectServiceAlertRepository
)
from projectstore.services.exceptions import InvalidQueryParameterError

Status = models.ProjectServiceAlertStatus
Severity = models.AlertSeverity
Type = models.AlertType
Service = models.ProjectServiceEnum

# (status, service, type, severity, created)
ALERT_ROWS = [
    (Status.JOB_FINISHED, Service.JOBS, Type.PROJECT_ALERT, Severity.INFO, datetime(2021, 1, 1, 9, 0)),
    (Status.JOB_FAILED, Service.JOBS, Type.PROJECT_ALERT, Severity.CRITICAL, datetime(2021, 1, 2, 9, 0)),
    (Status.JOB_KILLED, Service.JOBS, Type.GLOBAL_ALERT_SLACK, Severity.WARNING, datetime(2021, 1, 3, 9, 0)),
    (Status.VALIDATION_SUCCESS, Service.FEATURESTORE, Type.PROJECT_ALERT, Severity.INFO, datetime(2021, 1, 4, 9, 0)),
    (Status.VALIDATION_WARNING, Service.FEATURESTORE, Type.GLOBAL_ALERT_EMAIL, Severity.WARNING, datetime(2021, 1, 5, 9, 0)),
    (Status.VALIDATION_FAILURE, Service.FEATURESTORE, Type.GLOBAL_ALERT_SLACK, Severity.CRITICAL, datetime(2021, 1, 6, 9, 0)),
]

# ===================================================================
#  Fixture setup
# ===================================================================

@pytest.fixture
def alert_repo(db_session) -> SqlalchemyProjectServiceAlertRepository:
    return SqlalchemyProjectServiceAlertRepository(db_session)

@pytest.fixture
def alerts(db_session, project, other_project):
    """Six alerts in `project` (one per status) and one in `other_project`."""
    rows = []
    for status, service, alert_type, severity, created in ALERT_ROWS:
        rows.append(models.ProjectServiceAlert(
            project_id=project.id, status=status, service=service,
            alert_type=alert_type, severity=severity, created=created,
        ))
    rows.append(models.ProjectServiceAlert(
        project_id=other_project.id, status=Status.JOB_FAILED, service=Service.JOBS,
        alert_type=Type.PROJECT_ALERT, severity=Severity.CRITICAL, created=datetime(2021, 1, 2, 9, 0),
    ))
    db_session.add_all(rows)
    db_session.commit()
    return rows

def statuses(page):
    return {a.status for a in page.items}

# ===================================================================
#  Single result lookups
# ===================================================================
class TestLookups:
    def test_find_by_id(self, alert_repo, project, alerts):
        found = alert_repo.find_by_project_and_id(project, alerts[1].id)
        assert found is alerts[1]

    def test_find_by_id_missing_returns_none(self, alert_repo, project, alerts):
        assert alert_repo.find_by_project_and_id(project, 9999) is None

    def test_find_by_id_is_scoped_to_project(self, alert_repo, other_project, alerts):
        assert alert_repo.find_by_project_and_id(other_project, alerts[0].id) is None

    def test_find_by_status(self, alert_repo, project, alerts):
        found = alert_repo.find_by_project_and_status(project, Status.JOB_KILLED)
        assert found.alert_type is Type.GLOBAL_ALERT_SLACK

    def test_find_by_status_missing_returns_none(self, alert_repo, other_project, alerts):
        assert alert_repo.find_by_project_and_status(other_project, Status.JOB_KILLED) is None

# ===================================================================
#  Filtered, sorted, paginated listing
# ===================================================================
class TestFindAllProjectAlerts:
    def test_without_arguments_lists_every_project_alert(self, alert_repo, project, alerts):
        page = alert_repo.find_all_project_alerts(project)
        assert page.count == 6
        assert len(page.items) == 6
        assert all(a.project_id == project.id for a in page.items)

    def test_single_enum_filter_matches_exactly(self, alert_repo, project, alerts):
        page = alert_repo.find_all_project_alerts(project, filters={FilterBy("SEVERITY", "CRITICAL")})
        assert page.count == 2
        assert statuses(page) == {Status.JOB_FAILED, Status.VALIDATION_FAILURE}

    def test_enum_filter_accepts_several_values(self, alert_repo, project, alerts):
        page = alert_repo.find_all_project_alerts(project, filters={FilterBy("STATUS", "job_failed,job_killed")})
        assert statuses(page) == {Status.JOB_FAILED, Status.JOB_KILLED}

    def test_combined_filters_intersect(self, alert_repo, project, alerts):
        by_service = alert_repo.find_all_project_alerts(project, filters={FilterBy("SERVICE", "FEATURESTORE")})
        by_type = alert_repo.find_all_project_alerts(project, filters={FilterBy("TYPE", "GLOBAL_ALERT_SLACK")})

        both = alert_repo.find_all_project_alerts(
            project, filters={FilterBy("SERVICE", "FEATURESTORE"), FilterBy("TYPE", "GLOBAL_ALERT_SLACK")}
        )

        assert statuses(both) == statuses(by_service) & statuses(by_type) == {Status.VALIDATION_FAILURE}
        assert both.count == 1

    def test_empty_param_uses_default(self, alert_repo, project, alerts):
        page = alert_repo.find_all_project_alerts(project, filters={FilterBy("STATUS", "")})
        assert statuses(page) == {Status.JOB_FAILED}

    def test_unknown_filter_kind_is_ignored(self, alert_repo, project, alerts):
        page = alert_repo.find_all_project_alerts(project, filters={FilterBy("COLOR", "RED")})
        assert page.count == 6

    def test_invalid_enum_value_raises(self, alert_repo, project, alerts):
        with pytest.raises(InvalidQueryParameterError):
            alert_repo.find_all_project_alerts(project, filters={FilterBy("TYPE", "CARRIER_PIGEON")})

    def test_created_filters(self, alert_repo, project, alerts):
        after = alert_repo.find_all_project_alerts(project, filters={FilterBy("DATE_CREATED_GT", "2021-01-04")})
        before = alert_repo.find_all_project_alerts(project, filters={FilterBy("CREATED_LT", "2021-01-03")})
        exact = alert_repo.find_all_project_alerts(project, filters={FilterBy("CREATED", "2021-01-03T09:00:00")})

        assert statuses(after) == {Status.VALIDATION_SUCCESS, Status.VALIDATION_WARNING, Status.VALIDATION_FAILURE}
        assert statuses(before) == {Status.JOB_FINISHED, Status.JOB_FAILED}
        assert statuses(exact) == {Status.JOB_KILLED}

    def test_created_range(self, alert_repo, project, alerts):
        page = alert_repo.find_all_project_alerts(project, filters={
            FilterBy("CREATED_GT", "2021-01-02T12:00:00"), FilterBy("CREATED_LT", "2021-01-05"),
        })
        assert statuses(page) == {Status.JOB_KILLED, Status.VALIDATION_SUCCESS}

    def test_malformed_date_raises(self, alert_repo, project, alerts):
        with pytest.raises(InvalidQueryParameterError):
            alert_repo.find_all_project_alerts(project, filters={FilterBy("CREATED_GT", "01/02/2021")})

    def test_sort_by_created_defaults_to_newest_first(self, alert_repo, project, alerts):
        page = alert_repo.find_all_project_alerts(project, sorts=[SortBy("CREATED")])
        created = [a.created for a in page.items]
        assert created == sorted(created, reverse=True)

    def test_unknown_sort_kind_is_ignored(self, alert_repo, project, alerts):
        unsorted = alert_repo.find_all_project_alerts(project)
        page = alert_repo.find_all_project_alerts(project, sorts=[SortBy("COLOR")])

        assert page.count == unsorted.count == 6
        assert [a.id for a in page.items] == [a.id for a in unsorted.items]

    def test_unsorted_pages_follow_id_order(self, alert_repo, project, alerts):
        first = alert_repo.find_all_project_alerts(project, offset=0, limit=3)
        second = alert_repo.find_all_project_alerts(project, offset=3, limit=3)

        assert [a.id for a in first.items + second.items] == [a.id for a in alerts[:6]]

    def test_ties_are_broken_by_id(self, alert_repo, project, alerts):
        page = alert_repo.find_all_project_alerts(project, sorts=[SortBy("SEVERITY")])
        by_severity = {}
        for a in page.items:
            by_severity.setdefault(a.severity, []).append(a.id)
        assert all(ids == sorted(ids) for ids in by_severity.values())

    def test_sort_with_explicit_order(self, alert_repo, project, alerts):
        page = alert_repo.find_all_project_alerts(project, sorts=[SortBy("ID", Order.DESC)])
        ids = [a.id for a in page.items]
        assert ids == sorted(ids, reverse=True)

    def test_pagination_window(self, alert_repo, project, alerts):
        page = alert_repo.find_all_project_alerts(project, offset=2, limit=3, sorts=[SortBy("ID")])
        assert page.count == 6
        assert [a.id for a in page.items] == [a.id for a in alerts[2:5]]

    def test_count_is_independent_of_offset_and_limit(self, alert_repo, project, alerts):
        page = alert_repo.find_all_project_alerts(project, offset=10, limit=5)
        assert len(page.items) <= 5
        assert page.items == []
        assert page.count == 6

    def test_count_respects_filters_under_pagination(self, alert_repo, project, alerts):
        page = alert_repo.find_all_project_alerts(
            project, offset=1, limit=1, filters={FilterBy("SERVICE", "JOBS")}, sorts=[SortBy("ID")]
        )
        assert page.count == 3
        assert len(page.items) == 1
        assert page.items[0].status is Status.JOB_FAILED

# ===================================================================
#  Writes
# ===================================================================
class TestWrites:
    def test_create_assigns_id_and_timestamp(self, alert_repo, project):
        alert = alert_repo.create(models.ProjectServiceAlert(
            project_id=project.id, status=Status.JOB_FAILED, service=Service.JOBS,
            alert_type=Type.PROJECT_ALERT, severity=Severity.WARNING,
        ))
        assert alert.id is not None
        assert isinstance(alert.created, datetime)

    def test_update_and_delete(self, alert_repo, project, alerts):
        alert = alerts[0]
        alert.severity = Severity.CRITICAL
        alert_repo.update(alert)
        assert alert_repo.find_by_project_and_id(project, alert.id).severity is Severity.CRITICAL

        assert alert_repo.delete(alert) is True
        assert alert_repo.find_by_project_and_id(project, alert.id) is None

    def test_delete_nothing(self, alert_repo):
        assert alert_repo.delete(None) is False
