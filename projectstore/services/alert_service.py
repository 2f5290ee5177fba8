from typing import Any, Dict, List, Optional, Type

from loguru import logger

from projectstore.config import settings
from projectstore.database import models
from projectstore.repositories.interfaces import IProjectRepository, IProjectServiceAlertRepository
from projectstore.repositories.query import FilterBy, SortBy
from projectstore.services.exceptions import (
    ProjectNotFoundError, AlertNotFoundError, AlertAlreadyExistsError, InvalidQueryParameterError
)


def _to_enum(enum_type: Type, field: str, value):
    """Accepts an enum member or its (case-insensitive) name."""
    if isinstance(value, enum_type):
        return value
    try:
        return enum_type[str(value).strip().upper()]
    except KeyError:
        raise InvalidQueryParameterError(f"'{value}' is not a valid {field}.") from None


def alert_to_dict(alert: models.ProjectServiceAlert) -> Dict[str, Any]:
    return {
        "id": alert.id,
        "project_id": alert.project_id,
        "service": alert.service.name,
        "status": alert.status.name,
        "alert_type": alert.alert_type.name,
        "severity": alert.severity.name,
        "created": alert.created.isoformat() if alert.created else None,
    }


class ProjectServiceAlertService:
    """Manages the alerts a project attaches to its services' outcomes."""

    def __init__(self, alert_repo: IProjectServiceAlertRepository, project_repo: IProjectRepository):
        """
        Args:
            alert_repo: repository for service alerts.
            project_repo: repository used to resolve the owning project.
        """
        self.alert_repo = alert_repo
        self.project_repo = project_repo

    def _get_project(self, project_id: int) -> models.Project:
        project = self.project_repo.find_by_id(project_id)
        if not project:
            raise ProjectNotFoundError(f"Project with id '{project_id}' not found.")
        return project

    def _get_alert(self, project: models.Project, alert_id: int) -> models.ProjectServiceAlert:
        alert = self.alert_repo.find_by_project_and_id(project, alert_id)
        if not alert:
            raise AlertNotFoundError(f"Alert with id '{alert_id}' not found in project '{project.id}'.")
        return alert

    def create_alert(self, project_id: int, service, status, alert_type, severity) -> Dict[str, Any]:
        """
        Configures a new alert for one of the project's services.

        Args:
            project_id: owning project.
            service, status, alert_type, severity: enum members or their names.

        Returns:
            The created alert as a dictionary.

        Raises:
            ProjectNotFoundError: the project does not exist.
            AlertAlreadyExistsError: the project already has an alert for `status`.
            InvalidQueryParameterError: one of the enum names is unknown.
        """
        project = self._get_project(project_id)
        service = _to_enum(models.ProjectServiceEnum, "service", service)
        status = _to_enum(models.ProjectServiceAlertStatus, "status", status)
        alert_type = _to_enum(models.AlertType, "alert type", alert_type)
        severity = _to_enum(models.AlertSeverity, "severity", severity)

        if self.alert_repo.find_by_project_and_status(project, status):
            raise AlertAlreadyExistsError(
                f"Project '{project_id}' already has an alert for status {status.name}.")

        alert = models.ProjectServiceAlert(
            project_id=project.id,
            service=service,
            status=status,
            alert_type=alert_type,
            severity=severity,
        )
        created = self.alert_repo.create(alert)
        logger.info("Created alert {} ({}) for project {}", created.id, status.name, project_id)
        return alert_to_dict(created)

    def get_alert(self, project_id: int, alert_id: int) -> Dict[str, Any]:
        """
        Raises:
            ProjectNotFoundError: the project does not exist.
            AlertNotFoundError: no alert with that id in the project.
        """
        project = self._get_project(project_id)
        return alert_to_dict(self._get_alert(project, alert_id))

    def find_alert_for_status(self, project_id: int, status) -> Optional[Dict[str, Any]]:
        """
        Returns the alert to fire when a project service reports `status`,
        or None when the project has not configured one.
        """
        project = self._get_project(project_id)
        status = _to_enum(models.ProjectServiceAlertStatus, "status", status)
        alert = self.alert_repo.find_by_project_and_status(project, status)
        return alert_to_dict(alert) if alert else None

    def list_alerts(
        self,
        project_id: int,
        offset: Optional[int] = None,
        limit: Optional[int] = None,
        filter_by: Optional[List[str]] = None,
        sort_by: Optional[List[str]] = None,
    ) -> Dict[str, Any]:
        """
        Lists the project's alerts from query-string style arguments.

        Args:
            project_id: owning project.
            offset: rows to skip.
            limit: page size. Defaults to DEFAULT_PAGE_LIMIT, capped at MAX_PAGE_LIMIT.
            filter_by: expressions like "status:job_failed,job_killed" or
                "date_created_gt:2021-03-01".
            sort_by: expressions like "created:desc".

        Returns:
            {"count": <rows matching the filters>, "items": [<alert dict>, ...]}

        Raises:
            ProjectNotFoundError: the project does not exist.
            InvalidQueryParameterError: an expression or value could not be parsed.
        """
        project = self._get_project(project_id)
        filters = {FilterBy.parse(expression) for expression in filter_by or []}
        sorts = [SortBy.parse(expression) for expression in sort_by or []]
        if limit is None or limit <= 0:
            limit = settings.DEFAULT_PAGE_LIMIT
        limit = min(limit, settings.MAX_PAGE_LIMIT)

        page = self.alert_repo.find_all_project_alerts(
            project, offset=offset, limit=limit, filters=filters, sorts=sorts
        )
        return {"count": page.count, "items": [alert_to_dict(a) for a in page.items]}

    def update_alert(self, project_id: int, alert_id: int, severity=None, alert_type=None, service=None) -> Dict[str, Any]:
        """
        Changes an alert's routing. The status is the alert's identity within
        the project and cannot be changed; delete and re-create instead.

        Raises:
            ProjectNotFoundError: the project does not exist.
            AlertNotFoundError: no alert with that id in the project.
            InvalidQueryParameterError: one of the enum names is unknown. The alert is left untouched.
        """
        project = self._get_project(project_id)
        alert = self._get_alert(project, alert_id)
        # resolve every value before touching the attached alert
        changes = {}
        if severity is not None:
            changes["severity"] = _to_enum(models.AlertSeverity, "severity", severity)
        if alert_type is not None:
            changes["alert_type"] = _to_enum(models.AlertType, "alert type", alert_type)
        if service is not None:
            changes["service"] = _to_enum(models.ProjectServiceEnum, "service", service)
        for attr, value in changes.items():
            setattr(alert, attr, value)
        updated = self.alert_repo.update(alert)
        logger.info("Updated alert {} of project {}", alert_id, project_id)
        return alert_to_dict(updated)

    def delete_alert(self, project_id: int, alert_id: int) -> bool:
        """
        Raises:
            ProjectNotFoundError: the project does not exist.
            AlertNotFoundError: no alert with that id in the project.
        """
        project = self._get_project(project_id)
        alert = self._get_alert(project, alert_id)
        self.alert_repo.delete(alert)
        logger.info("Deleted alert {} of project {}", alert_id, project_id)
        return True
