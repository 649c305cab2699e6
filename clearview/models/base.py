from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class Document(BaseModel):
    """Base for records stored in the document store.

    Stored documents use camelCase keys (``customerId``, ``wiperSizes``);
    Python code uses snake_case attributes. Both are accepted on input.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    def to_document(self) -> dict:
        """Serialize for the document store (camelCase, JSON-safe)."""
        return self.model_dump(mode="json", by_alias=True)
