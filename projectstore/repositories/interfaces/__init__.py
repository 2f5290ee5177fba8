from .project import IProjectRepository
from .project_service_alert import (
    IProjectServiceAlertRepository, ProjectServiceAlertFilters, ProjectServiceAlertSorts
)
from .on_demand_featuregroup import IOnDemandFeaturegroupRepository
from .on_demand_feature import IOnDemandFeatureRepository
