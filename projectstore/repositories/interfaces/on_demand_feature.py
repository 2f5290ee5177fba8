from abc import ABC, abstractmethod
from typing import List, Optional
from projectstore.database import models

class IOnDemandFeatureRepository(ABC):
    @abstractmethod
    def find_by_id(self, feature_id: int) -> Optional[models.OnDemandFeature]:
        pass

    @abstractmethod
    def list_by_featuregroup(self, featuregroup: models.OnDemandFeaturegroup) -> List[models.OnDemandFeature]:
        """Lists a feature group's features in insertion order."""
        pass

    @abstractmethod
    def replace_features(
        self, featuregroup: models.OnDemandFeaturegroup, features: List[models.OnDemandFeature]
    ) -> List[models.OnDemandFeature]:
        """
        Swaps the feature group's schema for `features`.

        The existing features are deleted and the new ones persisted in the
        given order.

        Returns:
            The persisted features, ids assigned.
        """
        pass
