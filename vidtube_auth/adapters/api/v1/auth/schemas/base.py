"""Base model for every request and response body.

Python attributes are snake_case; JSON uses camelCase aliases (``fullName``,
``accessToken``). Both spellings are accepted on input.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
