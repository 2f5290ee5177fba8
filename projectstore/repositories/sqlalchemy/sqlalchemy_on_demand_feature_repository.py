from typing import List, Optional
from sqlalchemy.orm import Session
from projectstore.database import models
from projectstore.repositories.interfaces import IOnDemandFeatureRepository

Feature = models.OnDemandFeature

class SqlalchemyOnDemandFeatureRepository(IOnDemandFeatureRepository):
    def __init__(self, db_session: Session):
        self.db = db_session

    def find_by_id(self, feature_id: int) -> Optional[models.OnDemandFeature]:
        return self.db.query(Feature).filter(Feature.id == feature_id).first()

    def list_by_featuregroup(self, featuregroup: models.OnDemandFeaturegroup) -> List[models.OnDemandFeature]:
        return self.db.query(Feature).filter(
            Feature.on_demand_feature_group_id == featuregroup.id
        ).order_by(Feature.id.asc()).all()

    def replace_features(
        self, featuregroup: models.OnDemandFeaturegroup, features: List[models.OnDemandFeature]
    ) -> List[models.OnDemandFeature]:
        # delete-orphan on the relationship removes the previous rows on flush
        featuregroup.features = list(features)
        self.db.commit()
        for feature in features:
            self.db.refresh(feature)
        return list(features)
