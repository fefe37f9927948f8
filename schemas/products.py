from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictStr, field_validator
from typing import Dict, List, Union
import math

class ProductIn(BaseModel):
    """
    Payload aceito em POST e PUT.
    Todos os cinco campos são obrigatórios (PUT funciona como substituição completa)
    Campos desconhecidos são ignorados, inclusive id, _id e createdAt
    """
    model_config = ConfigDict(extra="ignore")

    name: StrictStr = Field(..., min_length=1)
    description: StrictStr = Field(..., min_length=1)
    price: Union[int, float]
    category: StrictStr = Field(..., min_length=1)
    inStock: StrictBool

    @field_validator("price", mode="before")
    @classmethod
    def price_is_number(cls, v):
        # bool é subclasse de int em Python, mas não é um preço válido
        if isinstance(v, bool) or not isinstance(v, (int, float)):
            raise ValueError("price must be a number")
        if isinstance(v, float) and not math.isfinite(v):
            raise ValueError("price must be finite")
        return v

class ProductOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    store_id: str = Field(..., alias="_id")
    name: str
    description: str
    price: Union[int, float]
    category: str
    inStock: bool
    createdAt: str

class ProductPage(BaseModel):
    total: int
    page: int
    limit: int
    products: List[ProductOut]

class ProductStats(BaseModel):
    totalProducts: int
    categories: Dict[str, int]
