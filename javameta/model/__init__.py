from typing import Any, Dict

import pydantic
from pydantic import ConfigDict


class MetaBase(pydantic.BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    def model_dump(self, **kwargs: Any) -> Dict[str, Any]:
        kwargs.pop("by_alias", None)
        return super(MetaBase, self).model_dump(by_alias=True, **kwargs)

    def model_dump_json(self, **kwargs: Any) -> str:
        for k in ["exclude_none", "by_alias", "indent"]:
            if k in kwargs:
                del kwargs[k]

        return super(MetaBase, self).model_dump_json(
            exclude_none=True, by_alias=True, indent=4, **kwargs
        )

    def write(self, file_path):
        with open(file_path, "w") as f:
            f.write(self.model_dump_json())

    def merge(self, other):
        """
        Return a copy of self overlaid with other.
        - Fields other leaves unset (None) keep our value
        - Any other field is taken from other as a whole
        """
        assert type(other) is type(self)
        update: Dict[str, Any] = {}
        for key in type(self).model_fields:
            theirs = getattr(other, key)
            if theirs is None:
                continue
            update[key] = theirs
        return self.model_copy(update=update)

    def __hash__(self):
        return hash(self.model_dump_json())
