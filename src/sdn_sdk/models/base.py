from pydantic import BaseModel, ConfigDict


class SDNModel(BaseModel):
    """Base for all SDK response models. Unknown server fields are ignored."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)
