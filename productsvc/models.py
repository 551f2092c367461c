# productsvc/models.py
from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr, field_validator

INT32_MIN = -(2 ** 31)
INT32_MAX = 2 ** 31 - 1


def _int32(**kwargs):
    return Field(0, ge=INT32_MIN, le=INT32_MAX, **kwargs)


class ProductDetails(BaseModel):
    """Full replace-on-write record for one product.

    Decoding is strict: unknown keys, strings in integer slots, floats and
    booleans are all rejected. Absent keys and explicit nulls fall back to
    their zero value so that field validation can report them.
    """

    model_config = ConfigDict(extra="forbid", strict=True)

    product_id: StrictInt = _int32()
    sku: StrictStr = ""
    manufacturer: StrictStr = ""
    category_id: StrictInt = _int32()
    weight: StrictInt = _int32()
    some_other_id: StrictInt = _int32()

    @field_validator("*", mode="before")
    @classmethod
    def _null_is_zero_value(cls, v, info):
        if v is None:
            return cls.model_fields[info.field_name].default
        return v


class ErrorBody(BaseModel):
    error: str
    message: str
    details: str
