from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, StrictInt

# books.price and books.pages are INTEGER (int4) columns
Int32 = Annotated[StrictInt, Field(ge=-(2**31), le=2**31 - 1)]


class NewBook(BaseModel):
    model_config = ConfigDict(strict=True)

    title: str
    author: str
    price: Int32
    pages: Int32
    is_published: bool


class Book(BaseModel):
    model_config = ConfigDict(strict=True)

    id: int
    title: str
    author: str
    price: Int32
    pages: Int32
    is_published: bool
