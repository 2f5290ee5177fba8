from .enums import AlertType, AlertSeverity, ProjectServiceAlertStatus, ProjectServiceEnum
from .project import Project
from .project_service_alert import ProjectServiceAlert
from .on_demand_featuregroup import OnDemandFeaturegroup
from .on_demand_feature import OnDemandFeature

__all__ = [
    "AlertType",
    "AlertSeverity",
    "ProjectServiceAlertStatus",
    "ProjectServiceEnum",
    "Project",
    "ProjectServiceAlert",
    "OnDemandFeaturegroup",
    "OnDemandFeature",
]
