from abc import ABC, abstractmethod
from typing import Optional
from projectstore.database import models

class IProjectRepository(ABC):
    """Resolves the project that owns alerts and on-demand feature groups."""

    @abstractmethod
    def find_by_id(self, project_id: int) -> Optional[models.Project]:
        """
        Looks a project up by id with its service alerts and on-demand
        feature groups already loaded. None when there is no such project.
        """
        pass
