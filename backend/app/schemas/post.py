from typing import Optional
from pydantic import BaseModel

class PostIn(BaseModel):
    text: Optional[str] = None
