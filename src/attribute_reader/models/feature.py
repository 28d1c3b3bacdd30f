"""
Feature context model.

A feature context holds the current attribute values of one feature
instance and is used to enrich schema records with live data.
"""

from typing import Any, Mapping, Optional

from pydantic import BaseModel, Field


class FeatureContext(BaseModel):
    """
    Live attribute values of a single feature.

    Attributes:
        attributes: Mapping of attribute name to current value
        fid: Feature identifier (optional)
    """

    attributes: dict[str, Any] = Field(
        default_factory=dict,
        description="Current attribute values keyed by attribute name",
    )

    fid: Optional[str] = Field(
        default=None,
        description="Feature identifier",
    )

    @classmethod
    def coerce(cls, feature: Any) -> Any:
        """
        Normalize a feature argument.

        Objects exposing an ``attributes`` mapping are used as-is; plain
        mappings are wrapped into a FeatureContext.
        """
        if feature is None or isinstance(feature, cls):
            return feature
        if isinstance(getattr(feature, "attributes", None), Mapping):
            return feature
        if isinstance(feature, Mapping):
            return cls(attributes=dict(feature))
        raise TypeError(
            f"Feature must be a mapping or expose an 'attributes' mapping, got {type(feature).__name__}"
        )
