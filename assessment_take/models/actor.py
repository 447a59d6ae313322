"""
models/actor.py

The current actor (who is using the app), passed explicitly to whoever needs it.
"""

from typing import Literal

from pydantic import BaseModel, Field

Role = Literal["admin", "instructor", "student"]


class Actor(BaseModel):
    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    role: Role = "student"
