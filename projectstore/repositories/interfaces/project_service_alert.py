from abc import ABC, abstractmethod
from typing import Iterable, Optional
from projectstore.database import models
from projectstore.repositories.query import CollectionInfo, FilterBy, Order, QueryEnum, SortBy


class ProjectServiceAlertFilters(QueryEnum):
    """
    Filter kinds understood by `find_all_project_alerts`.

    Each member carries (key, column, operator, field, default_param). `key` is
    the name callers filter by, `field` names the value in error messages and
    `default_param` is used when the caller sends no value.
    """
    TYPE = ("TYPE", "alert_type", "in", "alertType", models.AlertType.PROJECT_ALERT.name)
    STATUS = ("STATUS", "status", "in", "status", models.ProjectServiceAlertStatus.JOB_FAILED.name)
    SEVERITY = ("SEVERITY", "severity", "in", "severity", models.AlertSeverity.INFO.name)
    SERVICE = ("SERVICE", "service", "in", "service", models.ProjectServiceEnum.JOBS.name)
    CREATED = ("CREATED", "created", "eq", "created", "")
    CREATED_GT = ("DATE_CREATED_GT", "created", "gt", "createdFrom", "")
    CREATED_LT = ("DATE_CREATED_LT", "created", "lt", "createdTo", "")

    def __init__(self, key, column, operator, field, default_param):
        self.key = key
        self.column = column
        self.operator = operator
        self.field = field
        self.default_param = default_param

    def __str__(self):
        return self.key


class ProjectServiceAlertSorts(QueryEnum):
    ID = ("ID", "id", Order.ASC)
    TYPE = ("TYPE", "alert_type", Order.ASC)
    STATUS = ("STATUS", "status", Order.ASC)
    SEVERITY = ("SEVERITY", "severity", Order.ASC)
    CREATED = ("CREATED", "created", Order.DESC)

    def __init__(self, key, column, default_order):
        self.key = key
        self.column = column
        self.default_order = default_order

    def __str__(self):
        return self.key


class IProjectServiceAlertRepository(ABC):
    @abstractmethod
    def create(self, alert_model: models.ProjectServiceAlert) -> models.ProjectServiceAlert:
        """Persists a new service alert."""
        pass

    @abstractmethod
    def update(self, alert_model: models.ProjectServiceAlert) -> models.ProjectServiceAlert:
        """Flushes changes made to an attached alert."""
        pass

    @abstractmethod
    def delete(self, alert_model: models.ProjectServiceAlert) -> bool:
        """Deletes an alert. Returns False when given nothing to delete."""
        pass

    @abstractmethod
    def find_by_project_and_id(self, project: models.Project, alert_id: int) -> Optional[models.ProjectServiceAlert]:
        """Looks an alert up by id within a project. None when there is no match."""
        pass

    @abstractmethod
    def find_by_project_and_status(
        self, project: models.Project, status: models.ProjectServiceAlertStatus
    ) -> Optional[models.ProjectServiceAlert]:
        """Returns the project's alert for `status`, or None when none is configured."""
        pass

    @abstractmethod
    def find_all_project_alerts(
        self,
        project: models.Project,
        offset: Optional[int] = None,
        limit: Optional[int] = None,
        filters: Optional[Iterable[FilterBy]] = None,
        sorts: Optional[Iterable[SortBy]] = None,
    ) -> CollectionInfo:
        """
        Lists a project's alerts, filtered, sorted and paginated.

        Args:
            project: the project whose alerts are listed.
            offset: rows to skip. None or <= 0 skips nothing.
            limit: maximum rows returned. None or <= 0 returns all.
            filters: filter requests, combined with AND. Unknown kinds are ignored.
            sorts: sort requests, applied in order. Unknown kinds are ignored.

        Returns:
            CollectionInfo whose count ignores offset and limit.

        Raises:
            InvalidQueryParameterError: a filter value is not a valid enum name or date.
        """
        pass
