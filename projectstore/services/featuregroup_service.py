import re
from typing import Any, Dict, List

from loguru import logger

from projectstore.database import models
from projectstore.repositories.interfaces import (
    IProjectRepository, IOnDemandFeaturegroupRepository, IOnDemandFeatureRepository
)
from projectstore.services.exceptions import (
    ProjectNotFoundError, FeaturegroupNotFoundError, FeaturegroupAlreadyExistsError, FeatureValidationError
)

NAME_PATTERN = re.compile(r"^[a-z0-9_]+$")
MAX_NAME_LENGTH = 63
MAX_DESCRIPTION_LENGTH = 256


def feature_to_dict(feature: models.OnDemandFeature) -> Dict[str, Any]:
    return {
        "id": feature.id,
        "name": feature.name,
        "description": feature.description,
        "type": feature.type,
        "primary": bool(feature.primary),
    }


def featuregroup_to_dict(featuregroup: models.OnDemandFeaturegroup) -> Dict[str, Any]:
    return {
        "id": featuregroup.id,
        "project_id": featuregroup.project_id,
        "name": featuregroup.name,
        "version": featuregroup.version,
        "description": featuregroup.description,
        "query": featuregroup.query,
        "features": [feature_to_dict(f) for f in featuregroup.features],
    }


def _validate_name(kind: str, name: str) -> None:
    if not name or len(name) > MAX_NAME_LENGTH or not NAME_PATTERN.match(name):
        raise FeatureValidationError(
            f"Illegal {kind} name '{name}'. Names must be 1-{MAX_NAME_LENGTH} characters "
            f"of lower case letters, digits and underscores.")


def _validate_description(kind: str, description: str) -> None:
    if description and len(description) > MAX_DESCRIPTION_LENGTH:
        raise FeatureValidationError(
            f"Description of {kind} exceeds {MAX_DESCRIPTION_LENGTH} characters.")


def build_features(features: List[Dict[str, Any]]) -> List[models.OnDemandFeature]:
    """
    Validates feature definitions and turns them into entities.

    Each definition is a dict with "name", "type" and optionally
    "description" and "primary".

    Raises:
        FeatureValidationError: a name, type or description is invalid, or a name repeats.
    """
    if not features:
        raise FeatureValidationError("An on-demand feature group needs at least one feature.")

    seen = set()
    entities = []
    for definition in features:
        name = definition.get("name")
        _validate_name("feature", name)
        if name in seen:
            raise FeatureValidationError(f"Duplicate feature name '{name}'.")
        seen.add(name)

        feature_type = (definition.get("type") or "").strip()
        if not feature_type:
            raise FeatureValidationError(f"Feature '{name}' has no type.")
        description = definition.get("description") or ""
        _validate_description(f"feature '{name}'", description)

        entities.append(models.OnDemandFeature(
            name=name,
            type=feature_type,
            description=description,
            primary=bool(definition.get("primary", False)),
        ))
    return entities


class OnDemandFeaturegroupService:
    """Registers on-demand feature groups and maintains their schemas."""

    def __init__(
        self,
        featuregroup_repo: IOnDemandFeaturegroupRepository,
        feature_repo: IOnDemandFeatureRepository,
        project_repo: IProjectRepository,
    ):
        self.featuregroup_repo = featuregroup_repo
        self.feature_repo = feature_repo
        self.project_repo = project_repo

    def _get_featuregroup(self, featuregroup_id: int) -> models.OnDemandFeaturegroup:
        featuregroup = self.featuregroup_repo.find_by_id(featuregroup_id)
        if not featuregroup:
            raise FeaturegroupNotFoundError(f"On-demand feature group with id '{featuregroup_id}' not found.")
        return featuregroup

    def create_featuregroup(
        self,
        project_id: int,
        name: str,
        query: str,
        features: List[Dict[str, Any]],
        description: str = "",
        version: int = 1,
    ) -> Dict[str, Any]:
        """
        Registers a new on-demand feature group.

        Args:
            project_id: owning project.
            name: feature group name, unique per project and version.
            query: SQL run against the external source to read the data.
            features: feature definitions, see `build_features`.
            description: optional free text.
            version: positive version number.

        Returns:
            The created feature group, features included, as a dictionary.

        Raises:
            ProjectNotFoundError: the project does not exist.
            FeaturegroupAlreadyExistsError: name and version already taken in the project.
            FeatureValidationError: the group or one of its features is invalid.
        """
        project = self.project_repo.find_by_id(project_id)
        if not project:
            raise ProjectNotFoundError(f"Project with id '{project_id}' not found.")

        _validate_name("feature group", name)
        _validate_description(f"feature group '{name}'", description)
        if version is None or version < 1:
            raise FeatureValidationError(f"Illegal version {version} for feature group '{name}'.")
        if not query or not query.strip():
            raise FeatureValidationError(f"On-demand feature group '{name}' needs a query.")

        if self.featuregroup_repo.find_by_project_and_name(project, name, version):
            raise FeaturegroupAlreadyExistsError(
                f"Feature group '{name}' version {version} already exists in project '{project_id}'.")

        featuregroup = models.OnDemandFeaturegroup(
            project_id=project.id,
            name=name,
            version=version,
            description=description or "",
            query=query,
            features=build_features(features),
        )
        created = self.featuregroup_repo.create(featuregroup)
        logger.info("Created on-demand feature group {}_{} (id {}) in project {}",
                    name, version, created.id, project_id)
        return featuregroup_to_dict(created)

    def get_featuregroup(self, featuregroup_id: int) -> Dict[str, Any]:
        return featuregroup_to_dict(self._get_featuregroup(featuregroup_id))

    def get_features(self, featuregroup_id: int) -> List[Dict[str, Any]]:
        """
        Raises:
            FeaturegroupNotFoundError: the feature group does not exist.
        """
        featuregroup = self._get_featuregroup(featuregroup_id)
        return [feature_to_dict(f) for f in self.feature_repo.list_by_featuregroup(featuregroup)]

    def update_features(self, featuregroup_id: int, features: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        """
        Replaces the feature group's schema with `features`.

        Raises:
            FeaturegroupNotFoundError: the feature group does not exist.
            FeatureValidationError: one of the new features is invalid.
        """
        featuregroup = self._get_featuregroup(featuregroup_id)
        entities = build_features(features)
        persisted = self.feature_repo.replace_features(featuregroup, entities)
        logger.info("Replaced schema of feature group {} with {} features", featuregroup_id, len(persisted))
        return [feature_to_dict(f) for f in persisted]

    def delete_featuregroup(self, featuregroup_id: int) -> bool:
        featuregroup = self._get_featuregroup(featuregroup_id)
        self.featuregroup_repo.delete(featuregroup)
        logger.info("Deleted on-demand feature group {}", featuregroup_id)
        return True
