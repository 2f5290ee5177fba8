from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, UniqueConstraint, func
from sqlalchemy.orm import relationship
from ..database import Base

class OnDemandFeaturegroup(Base):
    """
    A feature group whose data lives in an external source and is computed
    on read by running `query`. Only its schema (the features) is stored.
    """
    __tablename__ = "on_demand_feature_group"
    __table_args__ = (
        UniqueConstraint("project_id", "name", "version", name="unique_on_demand_feature_group"),
    )
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(63), nullable=False)
    version = Column(Integer, nullable=False, default=1)
    description = Column(String(256), nullable=False, default="")
    query = Column(Text, nullable=False)
    created = Column(DateTime, nullable=False, server_default=func.now())

    project_id = Column(Integer, ForeignKey("projects.id"), nullable=False, index=True)
    project = relationship("Project", back_populates="on_demand_featuregroups")

    features = relationship(
        "OnDemandFeature",
        back_populates="on_demand_featuregroup",
        cascade="all, delete-orphan",
        order_by="OnDemandFeature.id",
    )
