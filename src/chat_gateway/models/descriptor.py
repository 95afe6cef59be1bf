"""
Model descriptor served by the model registry.
"""

from typing import Optional, Tuple, Dict, Any
from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


class ModelDescriptor(BaseModel):
    """
    Metadata record for one invokable model.

    Only ``id`` and ``provider_id`` carry meaning for the gateway; the
    remaining fields are display and capability metadata passed through
    to clients untouched. Instances are frozen: access-flag queries return
    copies produced by ``with_access``.
    """
    id: str = Field(..., description="Model identifier, unique within a provider family")
    provider_id: str = Field(..., description="Provider family serving this model")

    name: str = ""
    provider: str = ""
    model_family: Optional[str] = None
    base_provider_id: Optional[str] = None
    description: str = ""
    tags: Tuple[str, ...] = ()
    context_window: Optional[int] = None
    input_cost: Optional[float] = None
    output_cost: Optional[float] = None
    price_unit: Optional[str] = None
    vision: bool = False
    tools: bool = False
    audio: bool = False
    reasoning: bool = False
    web_search: bool = False
    open_source: bool = False
    speed: Optional[str] = None
    intelligence: Optional[str] = None
    website: Optional[str] = None
    api_docs: Optional[str] = None
    model_page: Optional[str] = None
    released_at: Optional[str] = None
    icon: Optional[str] = None

    # Set only on copies returned from access-flag queries
    accessible: Optional[bool] = None

    class Config:
        frozen = True
        alias_generator = to_camel
        populate_by_name = True

    def with_access(self, accessible: bool = True) -> "ModelDescriptor":
        """Return a copy annotated with an access flag."""
        return self.model_copy(update={"accessible": accessible})

    def to_wire(self) -> Dict[str, Any]:
        """Serialize in the camelCase shape clients expect."""
        return self.model_dump(by_alias=True, exclude_none=True)
