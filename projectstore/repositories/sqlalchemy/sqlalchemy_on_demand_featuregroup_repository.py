from typing import List, Optional
from sqlalchemy.orm import Session, selectinload
from projectstore.database import models
from projectstore.repositories.interfaces import IOnDemandFeaturegroupRepository

Featuregroup = models.OnDemandFeaturegroup

class SqlalchemyOnDemandFeaturegroupRepository(IOnDemandFeaturegroupRepository):
    def __init__(self, db_session: Session):
        self.db = db_session

    def create(self, featuregroup_model: models.OnDemandFeaturegroup) -> models.OnDemandFeaturegroup:
        self.db.add(featuregroup_model)
        self.db.commit()
        self.db.refresh(featuregroup_model)
        return featuregroup_model

    def find_by_id(self, featuregroup_id: int) -> Optional[models.OnDemandFeaturegroup]:
        return self.db.query(Featuregroup).options(selectinload(Featuregroup.features)).filter(
            Featuregroup.id == featuregroup_id
        ).first()

    def find_by_project_and_name(
        self, project: models.Project, name: str, version: int
    ) -> Optional[models.OnDemandFeaturegroup]:
        return self.db.query(Featuregroup).filter(
            Featuregroup.project_id == project.id,
            Featuregroup.name == name,
            Featuregroup.version == version
        ).first()

    def list_by_project(self, project: models.Project) -> List[models.OnDemandFeaturegroup]:
        return self.db.query(Featuregroup).filter(Featuregroup.project_id == project.id).order_by(
            Featuregroup.name.asc(), Featuregroup.version.asc()
        ).all()

    def delete(self, featuregroup_model: models.OnDemandFeaturegroup) -> bool:
        if featuregroup_model:
            self.db.delete(featuregroup_model)
            self.db.commit()
            return True
        return False
