import enum


class AlertType(str, enum.Enum):
    """Where a triggered alert is routed."""
    PROJECT_ALERT = "project-alert"
    SYSTEM_ALERT = "system-alert"
    GLOBAL_ALERT_EMAIL = "global-receiver-email"
    GLOBAL_ALERT_SLACK = "global-receiver-slack"
    GLOBAL_ALERT_PAGERDUTY = "global-receiver-pagerduty"


class AlertSeverity(str, enum.Enum):
    CRITICAL = "critical"
    WARNING = "warning"
    INFO = "info"


class ProjectServiceAlertStatus(str, enum.Enum):
    """Service outcomes an alert can be attached to."""
    JOB_FINISHED = "Finished"
    JOB_FAILED = "Failed"
    JOB_KILLED = "Killed"
    VALIDATION_SUCCESS = "Success"
    VALIDATION_WARNING = "Warning"
    VALIDATION_FAILURE = "Failure"


class ProjectServiceEnum(str, enum.Enum):
    JOBS = "Jobs"
    FEATURESTORE = "Feature store"
