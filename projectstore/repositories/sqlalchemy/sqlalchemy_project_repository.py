from typing import Optional
from sqlalchemy.orm import Session, selectinload
from projectstore.database import models
from projectstore.repositories.interfaces import IProjectRepository

Project = models.Project

class SqlalchemyProjectRepository(IProjectRepository):
    def __init__(self, db_session: Session):
        self.db = db_session

    def find_by_id(self, project_id: int) -> Optional[models.Project]:
        return self.db.query(Project).options(
            selectinload(Project.service_alerts),
            selectinload(Project.on_demand_featuregroups),
        ).filter(Project.id == project_id).first()
