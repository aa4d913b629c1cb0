from pydantic import BaseModel, ConfigDict


class MatrixModel(BaseModel):
    """Base for all response models.

    Unknown keys are kept so event bodies and future fields survive decoding.
    """

    model_config = ConfigDict(extra="allow")
