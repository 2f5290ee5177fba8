from typing import Iterable, Optional
from loguru import logger
from sqlalchemy.orm import Session
from projectstore.database import models
from projectstore.repositories.interfaces import (
    IProjectServiceAlertRepository, ProjectServiceAlertFilters, ProjectServiceAlertSorts
)
from projectstore.repositories.query import (
    CollectionInfo, FilterBy, Order, SortBy, get_date, get_enum_values, paginate
)

Alert = models.ProjectServiceAlert

class SqlalchemyProjectServiceAlertRepository(IProjectServiceAlertRepository):
    def __init__(self, db_session: Session):
        self.db = db_session

    def create(self, alert_model: models.ProjectServiceAlert) -> models.ProjectServiceAlert:
        self.db.add(alert_model)
        self.db.commit()
        self.db.refresh(alert_model)
        return alert_model

    def update(self, alert_model: models.ProjectServiceAlert) -> models.ProjectServiceAlert:
        self.db.commit()
        self.db.refresh(alert_model)
        return alert_model

    def delete(self, alert_model: models.ProjectServiceAlert) -> bool:
        if alert_model:
            self.db.delete(alert_model)
            self.db.commit()
            return True
        return False

    def find_by_project_and_id(self, project: models.Project, alert_id: int) -> Optional[models.ProjectServiceAlert]:
        return self.db.query(Alert).filter(
            Alert.project_id == project.id,
            Alert.id == alert_id
        ).first()

    def find_by_project_and_status(
        self, project: models.Project, status: models.ProjectServiceAlertStatus
    ) -> Optional[models.ProjectServiceAlert]:
        return self.db.query(Alert).filter(
            Alert.project_id == project.id,
            Alert.status == status
        ).first()

    def find_all_project_alerts(
        self,
        project: models.Project,
        offset: Optional[int] = None,
        limit: Optional[int] = None,
        filters: Optional[Iterable[FilterBy]] = None,
        sorts: Optional[Iterable[SortBy]] = None,
    ) -> CollectionInfo:
        filters = list(filters or ())
        sorts = list(sorts or ())
        query = self.db.query(Alert).filter(Alert.project_id == project.id)
        for filter_by in filters:
            clause = self._filter_clause(filter_by)
            if clause is not None:
                query = query.filter(clause)
        logger.debug("Listing alerts of project {} with filters={} sorts={} offset={} limit={}",
                     project.id, filters, sorts, offset, limit)

        count = query.count()
        for sort_by in sorts:
            order_by = self._sort_clause(sort_by)
            if order_by is not None:
                query = query.order_by(order_by)
        # id keeps pages stable when the requested sorts tie or are absent
        query = query.order_by(Alert.id.asc())
        items = paginate(query, offset, limit).all()
        return CollectionInfo(count=count, items=items)

    def _filter_clause(self, filter_by: FilterBy):
        kind = ProjectServiceAlertFilters.of(filter_by.value)
        if kind is None:
            return None
        if not filter_by.param:
            filter_by = FilterBy(filter_by.value, kind.default_param)

        column = getattr(Alert, kind.column)
        if kind is ProjectServiceAlertFilters.TYPE:
            return column.in_(get_enum_values(filter_by, kind.field, models.AlertType))
        elif kind is ProjectServiceAlertFilters.STATUS:
            return column.in_(get_enum_values(filter_by, kind.field, models.ProjectServiceAlertStatus))
        elif kind is ProjectServiceAlertFilters.SEVERITY:
            return column.in_(get_enum_values(filter_by, kind.field, models.AlertSeverity))
        elif kind is ProjectServiceAlertFilters.SERVICE:
            return column.in_(get_enum_values(filter_by, kind.field, models.ProjectServiceEnum))
        elif kind in (ProjectServiceAlertFilters.CREATED,
                      ProjectServiceAlertFilters.CREATED_GT,
                      ProjectServiceAlertFilters.CREATED_LT):
            date = get_date(kind.field, filter_by.param)
            if kind.operator == "gt":
                return column > date
            if kind.operator == "lt":
                return column < date
            return column == date
        return None

    def _sort_clause(self, sort_by: SortBy):
        kind = ProjectServiceAlertSorts.of(sort_by.value)
        if kind is None:
            return None
        column = getattr(Alert, kind.column)
        order = sort_by.order or kind.default_order
        return column.desc() if order == Order.DESC else column.asc()
