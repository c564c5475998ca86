# storefront/schemas/common.py
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """API bodies are camelCase; Python attributes and Firestore fields stay snake_case."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
