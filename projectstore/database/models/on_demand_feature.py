from sqlalchemy import Column, Integer, String, Boolean, ForeignKey
from sqlalchemy.orm import relationship
from ..database import Base

class OnDemandFeature(Base):
    """
    One column of an on-demand feature group: its name, description,
    declared type and whether it is part of the primary key.

    Two features are equal when every scalar field, id included, is equal.
    The owning feature group takes no part in equality or hashing.
    """
    __tablename__ = "on_demand_feature"
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(63), nullable=False)
    description = Column(String(256), nullable=False)
    type = Column(String(1000), nullable=False)
    primary = Column("primary_column", Boolean, nullable=False, default=False)

    on_demand_feature_group_id = Column(Integer, ForeignKey("on_demand_feature_group.id"), index=True)
    on_demand_featuregroup = relationship("OnDemandFeaturegroup", back_populates="features")

    def __init__(self, **kwargs):
        kwargs.setdefault("primary", False)
        super().__init__(**kwargs)

    def _key(self):
        return (self.id, self.description, self.name, self.type, self.primary)

    def __eq__(self, other):
        if self is other:
            return True
        if other is None or type(self) is not type(other):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self):
        return hash(self._key())

    def __repr__(self):
        return f"OnDemandFeature(id={self.id!r}, name={self.name!r}, type={self.type!r}, primary={self.primary!r})"
