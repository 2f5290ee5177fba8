from abc import ABC, abstractmethod
from typing import List, Optional
from projectstore.database import models

class IOnDemandFeaturegroupRepository(ABC):
    @abstractmethod
    def create(self, featuregroup_model: models.OnDemandFeaturegroup) -> models.OnDemandFeaturegroup:
        """Persists a feature group along with the features attached to it."""
        pass

    @abstractmethod
    def find_by_id(self, featuregroup_id: int) -> Optional[models.OnDemandFeaturegroup]:
        pass

    @abstractmethod
    def find_by_project_and_name(
        self, project: models.Project, name: str, version: int
    ) -> Optional[models.OnDemandFeaturegroup]:
        """Looks a feature group up by its (name, version) within a project."""
        pass

    @abstractmethod
    def list_by_project(self, project: models.Project) -> List[models.OnDemandFeaturegroup]:
        pass

    @abstractmethod
    def delete(self, featuregroup_model: models.OnDemandFeaturegroup) -> bool:
        """Deletes a feature group and, by cascade, its features."""
        pass
