from sqlalchemy import Column, Integer, DateTime, Enum, ForeignKey, UniqueConstraint, func
from sqlalchemy.orm import relationship
from ..database import Base
from .enums import AlertType, AlertSeverity, ProjectServiceAlertStatus, ProjectServiceEnum

class ProjectServiceAlert(Base):
    """
    An alert configured on one of a project's services. It fires when the
    service reports `status` (e.g. a job ends in JOB_FAILED) and is routed
    according to `alert_type` with the given `severity`.
    """
    __tablename__ = "project_service_alert"
    __table_args__ = (
        UniqueConstraint("project_id", "status", name="unique_project_service_alert"),
    )
    id = Column(Integer, primary_key=True, index=True)
    service = Column(Enum(ProjectServiceEnum), nullable=False)
    status = Column(Enum(ProjectServiceAlertStatus), nullable=False)
    alert_type = Column(Enum(AlertType), nullable=False)
    severity = Column(Enum(AlertSeverity), nullable=False)
    created = Column(DateTime, nullable=False, server_default=func.now())

    project_id = Column(Integer, ForeignKey("projects.id"), nullable=False, index=True)
    project = relationship("Project", back_populates="service_alerts")
