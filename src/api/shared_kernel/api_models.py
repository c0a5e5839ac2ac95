"""Base model for JSON bodies exchanged with the web client.

The client speaks camelCase; Python code uses snake_case attribute names.
Both spellings are accepted on input and camelCase is emitted on output.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Pydantic model with camelCase aliases."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
