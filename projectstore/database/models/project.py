from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship
from ..database import Base

class Project(Base):
    """
    An isolated workspace. Service alerts and on-demand feature groups
    all belong to exactly one project.
    """
    __tablename__ = "projects"
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, unique=True, nullable=False, index=True)

    service_alerts = relationship("ProjectServiceAlert", back_populates="project", cascade="all, delete-orphan")
    on_demand_featuregroups = relationship("OnDemandFeaturegroup", back_populates="project", cascade="all, delete-orphan")
