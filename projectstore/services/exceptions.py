# projectstore/services/exceptions.py

# --- General Exceptions ---
class ProjectNotFoundError(Exception):
    """The project does not exist"""
    pass

class AlertNotFoundError(Exception):
    """No alert with the given id in the project"""
    pass

class FeaturegroupNotFoundError(Exception):
    """The on-demand feature group does not exist"""
    pass

# --- Creation/Validation Exceptions ---
class AlertAlreadyExistsError(Exception):
    """The project already has an alert for this status"""
    pass

class FeaturegroupAlreadyExistsError(Exception):
    """A feature group with the same name and version exists in the project"""
    pass

class FeatureValidationError(Exception):
    """A feature group or feature definition is malformed"""
    pass

# --- Query Exceptions ---
class InvalidQueryParameterError(ValueError):
    """A filter/sort expression or one of its values could not be parsed"""
    pass
